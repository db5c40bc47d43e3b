"""
Enum definitions for the QA Testing Backend
"""

from enum import Enum

class SectionKey(str, Enum):
    """
    App sections a tester can report on.

    Values are the names stored in test_sections.section_name.
    """
    PASSENGER_APP = "passenger_app"
    DRIVER_APP = "driver_app"
    CROSS_APP = "cross_app"

class FeatureStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"
    NOT_TESTED = "Not Tested"

class BugPriority(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
