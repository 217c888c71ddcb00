from .attendances import Attendances
from .auth import Auth
from .cells import Cells
from .dashboard import Dashboard
from .exports import Exports
from .members import Members
from .notices import Notices
from .prayers import Prayers
from .profile import Profile
from .reports import Reports
from .semesters import Semesters
from .statistics import Statistics
from .suggestions import Suggestions
from .teams import Teams

__all__ = [
    "Auth",
    "Members",
    "Cells",
    "Teams",
    "Attendances",
    "Notices",
    "Prayers",
    "Semesters",
    "Suggestions",
    "Statistics",
    "Dashboard",
    "Reports",
    "Exports",
    "Profile",
]
