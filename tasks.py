""" Invoke tasks. """
import os
import sys
import io
from invoke.tasks import task

if isinstance(sys.stdout, io.TextIOWrapper):
    sys.stdout.reconfigure(encoding='utf-8')


@task
def install(c):
    c.run('pip install -e ".[test]"')


@task
def serve(c, host="127.0.0.1", port=8001):
    c.run(f"uvicorn main:app --reload --host {host} --port {port}", env={"PYTHONUTF8": "1"})


@task
def test(c, k=None):
    """Run the test suite; `-k` filters tests by name."""
    cmd = "pytest -q"
    if k:
        cmd += f" -k \"{k}\""
    c.run(cmd, env={"PYTHONUTF8": "1"}, pty=os.name != 'nt')


@task(help={"path": "School data JSON file", "time_limit": "Search budget in seconds"})
def solve(c, path, time_limit=None):
    """
    Solve a school data JSON file and print each class timetable.
    """
    from utils.logger import logger
    from utils.loader import load_school_data
    from scheduler.builder import solve as solve_timetable
    from scheduler.extractor import build_all_timetables

    school_data = load_school_data(path)
    solution, message = solve_timetable(
        school_data,
        progress=lambda p: logger.info(f"[{p.percent:5.1f}%] {p.status}"),
        time_limit=float(time_limit) if time_limit else None,
    )
    print(message)
    if solution is None:
        sys.exit(1)

    for name, grid in build_all_timetables(school_data, solution, "class").items():
        print(f"\n=== {name} ===")
        print(grid.to_string())


@task
def clean(c):
    """
    Cross-platform clean task to remove all __pycache__ folders and .pyc files.
    """
    if os.name == 'nt':  # Windows
        # Remove all .pyc files
        c.run("for /R %f in (*.pyc) do del /F /Q \"%f\"", warn=True)
        # Remove all __pycache__ directories recursively
        c.run('for /d /r %d in (__pycache__) do @if exist "%d" rmdir /s /q "%d"', warn=True)
    else:  # Unix/Linux/macOS
        c.run("find . -type f -name '*.pyc' -delete", warn=True)
        c.run("find . -type d -name '__pycache__' -exec rm -r {} +", warn=True)
