# 📦 /schemas/schemas.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.normalize import is_set, norm, to_int

CHILD_AGE_LIMIT = 14  # below this a member counts as a child


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"

    @classmethod
    def parse(cls, value) -> Optional["Gender"]:
        """Accepts male/m and female/f in any case."""
        v = norm(value)
        if v in ("male", "m"):
            return cls.MALE
        if v in ("female", "f"):
            return cls.FEMALE
        return None


class YesNo(str, Enum):
    YES = "yes"
    NO = "no"

    @classmethod
    def parse(cls, value) -> Optional["YesNo"]:
        v = norm(value)
        if v == "yes":
            return cls.YES
        if v == "no":
            return cls.NO
        return None


class DawatStatus(str, Enum):
    NIL = "Nil"
    THREE_DAY = "3-day"
    TEN_DAY = "10-day"
    FORTY_DAY = "40-day"
    FOUR_MONTH = "4-month"

    @classmethod
    def parse(cls, value) -> Optional["DawatStatus"]:
        v = norm(value)
        for status in cls:
            if status.value.lower() == v:
                return status
        return None


DAWAT_KEYS = (
    DawatStatus.THREE_DAY,
    DawatStatus.TEN_DAY,
    DawatStatus.FORTY_DAY,
    DawatStatus.FOUR_MONTH,
)


def _text(value) -> str:
    return "" if value is None else str(value)


def _identity(value):
    """Keep str/int ids; Mongo-style {"$oid": ...} and anything else become text."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, dict) and "$oid" in value:
        return _text(value["$oid"])
    return str(value)


class DawatCounts(BaseModel):
    """How many times a member went out for each dawat duration."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    three_day: int = Field(0, alias="3-day")
    ten_day: int = Field(0, alias="10-day")
    forty_day: int = Field(0, alias="40-day")
    four_month: int = Field(0, alias="4-month")

    @field_validator("three_day", "ten_day", "forty_day", "four_month", mode="before")
    @classmethod
    def _count(cls, v):
        n = to_int(v)
        return n if n is not None and n > 0 else 0

    def get(self, key: Optional[DawatStatus]) -> int:
        if key == DawatStatus.THREE_DAY:
            return self.three_day
        elif key == DawatStatus.TEN_DAY:
            return self.ten_day
        elif key == DawatStatus.FORTY_DAY:
            return self.forty_day
        elif key == DawatStatus.FOUR_MONTH:
            return self.four_month
        return 0

    def total(self) -> int:
        return self.three_day + self.ten_day + self.forty_day + self.four_month


class Member(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str | int] = None
    name: str = ""
    father_name: str = Field("", alias="fatherName")
    phone: str = ""
    gender: Optional[Gender] = None
    age: Optional[int] = None
    occupation: str = ""
    education: str = ""
    quran: Optional[YesNo] = None
    maktab: YesNo = YesNo.NO
    dawat: DawatStatus = DawatStatus.NIL
    dawat_counts: DawatCounts = Field(default_factory=DawatCounts, alias="dawatCounts")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return _identity(v)

    @field_validator("name", "father_name", "phone", "occupation", "education", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _text(v)

    @field_validator("gender", mode="before")
    @classmethod
    def _coerce_gender(cls, v):
        return Gender.parse(v)

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, v):
        age = to_int(v)
        return age if age is not None and age >= 0 else None

    @field_validator("quran", mode="before")
    @classmethod
    def _coerce_quran(cls, v):
        return YesNo.parse(v)

    @field_validator("maktab", mode="before")
    @classmethod
    def _coerce_maktab(cls, v):
        return YesNo.parse(v) or YesNo.NO

    @field_validator("dawat", mode="before")
    @classmethod
    def _coerce_dawat(cls, v):
        return DawatStatus.parse(v) or DawatStatus.NIL

    @field_validator("dawat_counts", mode="before")
    @classmethod
    def _coerce_counts(cls, v):
        if isinstance(v, (dict, DawatCounts)):
            return v
        return {}

    @property
    def is_child(self) -> bool:
        return self.age is not None and self.age < CHILD_AGE_LIMIT

    @property
    def is_baligh(self) -> bool:
        """Adult male. Female members are never counted here."""
        return (
            self.gender == Gender.MALE
            and self.age is not None
            and self.age >= CHILD_AGE_LIMIT
        )


class House(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str | int] = None
    number: str = ""
    house_name: str = Field("", alias="houseName")
    street: str = ""
    members: List[Member] = []

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return _identity(v)

    @field_validator("number", "house_name", "street", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _text(v)

    @field_validator("members", mode="before")
    @classmethod
    def _coerce_members(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [m for m in v if isinstance(m, (dict, Member))]


class FilterCriteria(BaseModel):
    """Flat filter form state. Every field is optional; blank means unset."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    q: Optional[str] = None
    street: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    quran: Optional[str] = None
    maktab: Optional[str] = None
    gender: Optional[str] = None
    min_age: Optional[str] = Field(None, alias="minAge")
    max_age: Optional[str] = Field(None, alias="maxAge")
    baligh: Optional[str] = None
    dawat: Optional[str] = None
    dawat_count_key: Optional[str] = Field(None, alias="dawatCountKey")
    dawat_count_times: Optional[str] = Field(None, alias="dawatCountTimes")

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, v):
        if isinstance(v, Enum):
            return str(v.value)
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        return None

    def is_active(self) -> bool:
        return any(is_set(v) for v in self.model_dump().values())

    def without_search(self) -> "FilterCriteria":
        return self.model_copy(update={"q": None})


# ─────────────────────────────
# API envelopes

class FilterRequest(BaseModel):
    filters: FilterCriteria = FilterCriteria()
    houses: Optional[List[House]] = None


class FilterResponse(BaseModel):
    status: str
    total_houses: int
    total_members: int
    data: List[House]


class FacetsResponse(BaseModel):
    status: str
    streets: List[str]
    occupations: List[str]


class HouseSummary(BaseModel):
    total_houses: int
    total_members: int
    dawat: dict[str, int]
    active_dawat: int


class SummaryResponse(BaseModel):
    status: str
    data: HouseSummary


class HealthCheckResponse(BaseModel):
    status: str
    message: str
    version: str


class ErrorResponse(BaseModel):
    status: str
    message: str
    info: Optional[str | dict] = None
