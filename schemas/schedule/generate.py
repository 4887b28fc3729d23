from pydantic import BaseModel, model_validator, Field, ConfigDict
from typing import Dict, List, Optional, Any
from utils.constants import *


# Define data models
class LessonAssignmentIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    lesson: str
    teacher: str
    totalHours: int
    blockStructure: str

    @model_validator(mode="before")
    @classmethod
    def join_block_structure(cls, values: Any) -> Any:
        """
        Accept the block structure either as a comma separated string ("2,2,1")
        or as a list of integers ([2, 2, 1]).
        """
        if isinstance(values, dict) and isinstance(values.get("blockStructure"), list):
            values["blockStructure"] = ",".join(str(b) for b in values["blockStructure"])
        return values


class DefinitionsIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    lessons: List[str]
    teachers: List[str]
    classes: List[str]


class ConfigurationIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    schoolName: str = DEFAULT_SCHOOL_NAME
    principalName: str = DEFAULT_PRINCIPAL_NAME
    dailyHours: Dict[int, int] = Field(
        default_factory=lambda: {d: DEFAULT_HOURS_PER_DAY for d in range(TOTAL_DAYS)}
    )
    totalDays: int = TOTAL_DAYS


class SchoolDataRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    definitions: DefinitionsIn
    assignments: Dict[str, List[LessonAssignmentIn]] = Field(default_factory=dict)
    # teacher -> day index -> one flag per hour (true = free)
    availability: Dict[str, Dict[str, List[bool]]] = Field(default_factory=dict)
    configuration: ConfigurationIn = Field(default_factory=ConfigurationIn)
    priorities: Optional[Dict[str, int]] = None
    timeLimit: Optional[float] = Field(default=None, gt=0)
