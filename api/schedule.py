from schemas.schedule.generate import SchoolDataRequest
import logging
from fastapi import APIRouter, HTTPException
from core.models import Definitions, LessonAssignment, SchoolConfiguration, SchoolData
from scheduler.builder import solve_async
from scheduler.extractor import build_all_timetables, solution_to_records
from utils.availability import availability_summary
from exceptions.custom_errors import *
import traceback
from docs.schedule.generate import schedule_generate_description, schedule_availability_description

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["Timetable"])


def to_school_data(request: SchoolDataRequest) -> SchoolData:
    """Convert the request body into a validated SchoolData."""
    configuration = SchoolConfiguration(
        school_name=request.configuration.schoolName,
        principal_name=request.configuration.principalName,
        daily_hours=dict(request.configuration.dailyHours),
        total_days=request.configuration.totalDays,
    )
    definitions = Definitions(
        lessons=list(request.definitions.lessons),
        teachers=list(request.definitions.teachers),
        classes=list(request.definitions.classes),
    )
    assignments = {
        class_name: [
            LessonAssignment(
                lesson=a.lesson,
                teacher=a.teacher,
                total_hours=a.totalHours,
                block_structure=a.blockStructure,
            )
            for a in items
        ]
        for class_name, items in request.assignments.items()
    }
    school_data = SchoolData(
        definitions=definitions,
        assignments=assignments,
        constraints={t: dict(days) for t, days in request.availability.items()},
        configuration=configuration,
    )
    for class_name in definitions.classes:
        school_data.add_class(class_name)
    for teacher in definitions.teachers:
        school_data.add_teacher(teacher)

    school_data.validate_data()
    return school_data


def _timetables(school_data: SchoolData, solution, mode: str) -> dict:
    return {
        name: grid.to_dict(orient="list")
        for name, grid in build_all_timetables(school_data, solution, mode).items()
    }


# generate timetable
@router.post(
    "/generate",
    response_model=dict,
    description=schedule_generate_description,
    summary="Generate Timetable",
)
async def generate_timetable(request: SchoolDataRequest):
    try:
        school_data = to_school_data(request)
        solution, message = await solve_async(
            school_data,
            time_limit=request.timeLimit,
            priorities=request.priorities,
        )
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")

    if solution is None:
        raise HTTPException(status_code=422, detail=message)

    return {
        "success": True,
        "message": message,
        "solutionTime": round(solution.solution_time, 3),
        "blocks": solution_to_records(solution),
        "classTimetables": _timetables(school_data, solution, "class"),
        "teacherTimetables": _timetables(school_data, solution, "teacher"),
    }


# teacher availability overview
@router.post(
    "/availability",
    response_model=dict,
    description=schedule_availability_description,
    summary="Teacher Availability",
)
async def teacher_availability(request: SchoolDataRequest):
    try:
        school_data = to_school_data(request)
        summary = availability_summary(school_data)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))

    overloaded = summary.loc[summary["spare_hours"] < 0, "teacher"].tolist()
    if overloaded:
        logger.info(f"⚠️ Teachers with more hours than free slots: {overloaded}")
    return {"teachers": summary.to_dict(orient="records"), "overloaded": overloaded}
