"""
Submission-related Pydantic models
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from qa_backend.models.enums import BugPriority, FeatureStatus, SectionKey

DEFAULT_UIUX_RATING = 50
DEFAULT_COMMENTS = ""


class CamelModel(BaseModel):
    """Accepts the camelCase keys sent by the QA form frontend"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TesterInfo(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=50)
    submission_date: date = Field(..., alias="date")

    @field_validator("submission_date", mode="before")
    @classmethod
    def truncate_timestamp(cls, v):
        # A DATE column keeps only the calendar day of an ISO timestamp
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class FinalFeedback(CamelModel):
    overall_rating: int = Field(..., ge=0, le=100)
    suggestions: Optional[str] = None


class UiuxRating(CamelModel):
    rating: Optional[int] = Field(None, ge=0, le=100)


class FeatureResult(CamelModel):
    status: FeatureStatus


class SectionInput(CamelModel):
    uiux_rating: Optional[UiuxRating] = None
    comments: Optional[str] = None
    features: Dict[str, FeatureResult] = Field(default_factory=dict)

    @field_validator("features", mode="before")
    @classmethod
    def default_features(cls, v):
        return {} if v is None else v

    @field_validator("features")
    @classmethod
    def validate_feature_names(cls, v):
        for feature_name in v:
            if not feature_name.strip():
                raise ValueError("feature names cannot be empty")
            if len(feature_name) > 255:
                raise ValueError(f"feature name too long: {feature_name[:32]}...")
        return v

    @property
    def rating(self) -> int:
        if self.uiux_rating is None or self.uiux_rating.rating is None:
            return DEFAULT_UIUX_RATING
        return self.uiux_rating.rating

    @property
    def comments_or_default(self) -> str:
        return self.comments if self.comments is not None else DEFAULT_COMMENTS


class BugReportInput(CamelModel):
    priority: BugPriority
    description: str = Field(..., min_length=1)
    screenshot: Optional[str] = Field(None, max_length=500)


# Payload field for each section, in insert order
SECTION_FIELDS: Tuple[Tuple[SectionKey, str], ...] = (
    (SectionKey.PASSENGER_APP, "passenger_app"),
    (SectionKey.DRIVER_APP, "driver_app"),
    (SectionKey.CROSS_APP, "cross_app"),
)


class SubmissionCreate(CamelModel):
    """Full QA form payload for POST /api/submissions"""
    tester_info: TesterInfo
    final_feedback: FinalFeedback
    passenger_app: Optional[SectionInput] = None
    driver_app: Optional[SectionInput] = None
    cross_app: Optional[SectionInput] = None
    bug_reports: List[BugReportInput] = Field(default_factory=list)

    @field_validator("bug_reports", mode="before")
    @classmethod
    def default_bug_reports(cls, v):
        return [] if v is None else v

    def sections(self) -> List[Tuple[SectionKey, SectionInput]]:
        """Sections present in the payload, skipping absent ones"""
        present = []
        for key, field_name in SECTION_FIELDS:
            section = getattr(self, field_name)
            if section is not None:
                present.append((key, section))
        return present
