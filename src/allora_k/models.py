"""Pydantic models for topics, inferences and model selections."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _number_to_str(value: Any) -> Any:
    # Registry and inference APIs may send ids and values as JSON numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Topic(BaseModel):
    """A prediction topic as listed by the topic registry."""

    model_config = ConfigDict(frozen=True)

    topic_id: str = Field(..., description="Registry topic identifier")
    topic_name: str = Field(..., description="Human readable topic name")
    description: str = Field(default="", description="Topic description")
    is_active: bool = Field(default=False, description="Whether the topic is producing inferences")
    updated_at: str = Field(default="", description="Last update timestamp as sent by the API")

    @field_validator("topic_id", mode="before")
    @classmethod
    def coerce_topic_id(cls, value: Any) -> Any:
        return _number_to_str(value)

    @field_validator("description", "updated_at", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TopicsData(BaseModel):
    topics: List[Topic]


class TopicsResponse(BaseModel):
    """Envelope returned by ``GET /allora/{chain_id}/topics``."""

    data: TopicsData


class InferenceData(BaseModel):
    network_inference_normalized: str

    @field_validator("network_inference_normalized", mode="before")
    @classmethod
    def coerce_value(cls, value: Any) -> Any:
        return _number_to_str(value)


class InferencePayload(BaseModel):
    inference_data: InferenceData


class InferenceResponse(BaseModel):
    """Envelope returned by the inference endpoint."""

    data: InferencePayload


class InferenceResult(BaseModel):
    """Normalized network inference for a topic."""

    model_config = ConfigDict(frozen=True)

    topic_id: str
    normalized_value: str


class ModelSelection(BaseModel):
    """Topic picked by the language model; null fields mean no match."""

    model_config = ConfigDict(populate_by_name=True)

    topic_id: Optional[str] = Field(default=None, alias="topicId")
    topic_name: Optional[str] = Field(default=None, alias="topicName")

    @field_validator("topic_id", "topic_name", mode="before")
    @classmethod
    def normalize(cls, value: Any) -> Any:
        value = _number_to_str(value)
        if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
            return None
        return value


class ActionOutcome(BaseModel):
    """Result of running the inference action for one user message."""

    handled: bool = Field(..., description="True when an inference was delivered")
    replies: List[str] = Field(default_factory=list, description="Texts emitted to the user")
