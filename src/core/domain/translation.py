"""Translation models."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate answer with its match score.

    ``tiebreak_key`` is the case-folded text, so "Hola" and "hola" count as
    the same answer when votes are tallied.
    """

    text: str
    score: float
    tiebreak_key: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.tiebreak_key:
            object.__setattr__(self, "tiebreak_key", self.text.casefold())


class Translation(BaseModel):
    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    match: float = 0.0


class LanguageInfo(BaseModel):
    code: str
    name: str


class MyMemoryMatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    translation: str | None = None
    match: float = 0.0


class MyMemoryResponseData(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    translated_text: str = Field(default="", alias="translatedText")
    match: float = 0.0


class MyMemoryResponse(BaseModel):
    """Subset of the MyMemory ``/get`` payload we rely on.

    ``responseStatus`` is sometimes sent as a string ("403"); lax mode
    coerces it to int.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    response_status: int = Field(default=0, alias="responseStatus")
    response_details: str | None = Field(default=None, alias="responseDetails")
    response_data: MyMemoryResponseData = Field(
        default_factory=MyMemoryResponseData,
        alias="responseData",
    )
    matches: list[MyMemoryMatch] = Field(default_factory=list)
