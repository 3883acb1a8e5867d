from timetabler.models.availability import InstructorAvailability  # noqa: F401
from timetabler.models.chromosome import Chromosome, Gene  # noqa: F401
from timetabler.models.conflict import ConflictInfo, ConflictKind  # noqa: F401
from timetabler.models.course import Course, CourseAssignment  # noqa: F401
from timetabler.models.room import Room, RoomType  # noqa: F401
from timetabler.models.section import Section  # noqa: F401
from timetabler.models.time_slot import TimeSlot  # noqa: F401
