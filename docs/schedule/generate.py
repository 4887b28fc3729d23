schedule_generate_description = """
Generate a weekly lesson timetable for every class

### Request Body

- `definitions`: The school catalogues
    - `lessons`: Lesson names
    - `teachers`: Teacher names
    - `classes`: Class names

- `assignments`: Class name -> list of lesson assignments, each with:
    - `lesson`: Lesson name (must be defined)
    - `teacher`: Teacher name (must be defined)
    - `totalHours`: Weekly hours
    - `blockStructure`: Contiguous sessions, e.g. `"2,2,1"` or `[2, 2, 1]`; must add up to `totalHours`

- `availability`: Teacher name -> day index (`"0"` = Monday) -> one boolean per hour, `true` = free (Optional)
    - Teachers or days that are left out are treated as fully free

- `configuration`: School settings (Optional)
    - `schoolName`, `principalName`
    - `dailyHours`: Day index -> number of lesson hours that day (1-10, default 7)
    - `totalDays`: Must be 5

- `priorities`: Lesson name -> priority, 1 = most important (Optional, overrides the built in table)

- `timeLimit`: Search budget in seconds (Optional, by default 15/30/60/90s depending on the number of blocks)

### Response

- `success`: `true` when every block was placed
- `message`: Outcome message
- `solutionTime`: Seconds spent solving
- `blocks`: Placed blocks with `className`, `teacher`, `lesson`, `length`, `priority`, `day` (0-based) and `start` (0-based hour)
- `classTimetables`: Class name -> day label -> list of cells, one per hour
- `teacherTimetables`: Teacher name -> day label -> list of cells, one per hour

### Errors

- `400`: Invalid school data (unknown names, block structure not matching total hours, wrong availability size)
- `422`: No timetable could be produced (no lessons, a lesson that does not fit its teacher's availability, no valid timetable exists, or the time limit ran out)
"""

schedule_availability_description = """
Summarise each teacher's weekly load against their free hours

Takes the same request body as `/schedule/generate`. Returns one row per teacher with
`teacher`, `total_hours`, `available_hours`, `blocked_hours` and `spare_hours`.
A negative `spare_hours` means the teacher's lessons cannot fit in their free hours.
"""
