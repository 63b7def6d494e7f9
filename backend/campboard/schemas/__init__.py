# backend/campboard/schemas/__init__.py

# Missions
from .mission import (
    MissionCreate,
    MissionUpdate,
    MissionOut,
)

# Campers / staff / bunks
from .people import (
    BunkIn,
    BunkOut,
    PersonOut,
    CamperCreate,
    StaffCreate,
)

# Submissions
from .submission import (
    SubmissionOut,
    SubmitRequest,
    WorkingMissionsIn,
)

__all__ = [
    "MissionCreate", "MissionUpdate", "MissionOut",
    "BunkIn", "BunkOut", "PersonOut", "CamperCreate", "StaffCreate",
    "SubmissionOut", "SubmitRequest", "WorkingMissionsIn",
]
