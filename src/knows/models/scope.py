from collections.abc import Iterable
from enum import Enum

from knows.utils.validators import ValidationError


class DataScope(str, Enum):
    """Evidence source a search or detail lookup applies to."""

    PAPER = "PAPER"
    PAPER_CN = "PAPER_CN"
    GUIDE = "GUIDE"
    MEETING = "MEETING"

    @classmethod
    def allowed(cls) -> str:
        return ", ".join(member.value for member in cls)

    @classmethod
    def parse(cls, value: str) -> "DataScope":
        """Parse a data scope, ignoring case and surrounding whitespace."""
        normalized = value.strip().upper() if isinstance(value, str) else ""
        if not normalized:
            raise ValidationError("data scope must be non-empty", field="data_scope")
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(
                f"unsupported data scope {value!r}; allowed: {cls.allowed()}",
                field="data_scope",
            ) from None

    @classmethod
    def parse_many(cls, values: Iterable[str]) -> list["DataScope"]:
        """Parse several data scopes, dropping duplicates but keeping order."""
        scopes: list[DataScope] = []
        for value in values:
            scope = cls.parse(value)
            if scope not in scopes:
                scopes.append(scope)
        return scopes

    @property
    def supports_translation(self) -> bool:
        """Chinese papers have no translate_to_chinese option."""
        return self is not DataScope.PAPER_CN


ALL_DATA_SCOPES: tuple[DataScope, ...] = tuple(DataScope)


class AnswerType(str, Enum):
    """Style of a generated answer."""

    CLINICAL = "CLINICAL"
    RESEARCH = "RESEARCH"
    POPULAR_SCIENCE = "POPULAR_SCIENCE"

    @classmethod
    def allowed(cls) -> str:
        return ", ".join(member.value for member in cls)

    @classmethod
    def parse(cls, value: str) -> "AnswerType":
        """Parse an answer type, ignoring case and surrounding whitespace."""
        normalized = value.strip().upper() if isinstance(value, str) else ""
        if not normalized:
            raise ValidationError("answer_type must be non-empty", field="answer_type")
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(
                f"unsupported answer_type {value!r}; allowed: {cls.allowed()}",
                field="answer_type",
            ) from None
