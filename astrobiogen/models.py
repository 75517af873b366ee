# astrobiogen/models.py
# Canonical records returned to the frontend. Field names follow the JSON it consumes.

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

# ==============================
# GeneLab
# ==============================

class Experiment(BaseModel):
    id: str
    title: str
    organism: str
    mission: str
    date: str
    tissue: Optional[str] = None
    description: Optional[str] = None
    datasetType: Optional[str] = None


class Sample(BaseModel):
    id: str
    type: str
    condition: str


class DataFile(BaseModel):
    name: str
    type: str
    size: str
    url: Optional[str] = None


class ExperimentDetail(Experiment):
    strain: Optional[str] = None
    launchDate: Optional[str] = None
    landingDate: Optional[str] = None
    duration: Optional[str] = None
    platform: Optional[str] = None
    principalInvestigator: Optional[str] = None
    institution: Optional[str] = None
    samples: List[Sample] = Field(default_factory=list)
    dataFiles: List[DataFile] = Field(default_factory=list)


class ExperimentPage(BaseModel):
    total: int
    page: int
    limit: int
    data: List[Experiment]


class GeneRecord(BaseModel):
    gene_symbol: str = Field(min_length=1)
    gene_name: Optional[str] = None
    fold_change: float = Field(allow_inf_nan=False)
    p_value: float = Field(gt=0, le=1, allow_inf_nan=False)
    function: Optional[str] = None

# ==============================
# Space data
# ==============================

class SpaceWeatherEvent(BaseModel):
    activityID: str
    startTime: str
    sourceLocation: str = "Unknown"
    note: str
    type: Literal["CME", "FLARE", "SEP"]
    link: str = "https://www.swpc.noaa.gov/"


class LaunchRecord(BaseModel):
    name: str
    provider: str
    vehicle: str
    pad: str
    location: str
    net: str
    status: str
    mission: str
    description: str


class IssLocation(BaseModel):
    timestamp: int
    latitude: float
    longitude: float
    altitude: float   # km
    velocity: float   # km/h


class PlanetPosition(BaseModel):
    name: str
    distance: float   # AU
    angle: float      # degrees
    diameter: float   # Earth = 1

# ==============================
# Insights (Groq / Tavily / chat)
# ==============================

class SourceRef(BaseModel):
    title: str = ""
    url: str = ""
    content: str = ""


class Explanation(BaseModel):
    explanation: str


class ResearchResult(BaseModel):
    answer: str
    sources: List[SourceRef] = Field(default_factory=list)


class SearchResult(BaseModel):
    answer: Optional[str] = None
    results: List[Dict[str, Any]] = Field(default_factory=list)
    images: List[Any] = Field(default_factory=list)


class PlanetFacts(BaseModel):
    facts: List[str]


class QuizQuestion(BaseModel):
    question: str
    options: List[str]
    correctAnswer: str


class Quiz(BaseModel):
    questions: List[QuizQuestion]


class ChatMessage(BaseModel):
    role: str
    content: str = ""


class ChatReply(BaseModel):
    response: str

# ==============================
# NASA
# ==============================

class NasaImage(BaseModel):
    title: str
    description: Optional[str] = None
    date_created: Optional[str] = None
    href: str


class ImageResults(BaseModel):
    items: List[NasaImage]


class Apod(BaseModel):
    title: str
    date: str
    explanation: str
    url: str
    hdurl: Optional[str] = None
    media_type: Optional[str] = None
    copyright: Optional[str] = None
