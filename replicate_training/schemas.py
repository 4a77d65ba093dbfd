import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import AnyUrl, BaseModel, ConfigDict, Field

from .exceptions import EncodingError

TERMINAL_TRAINING_STATUSES = {"succeeded", "failed", "canceled"}


def _encode_value(field_name: str, value: Any) -> Any:
    if isinstance(value, AnyUrl):
        return str(value)
    if isinstance(value, Path):
        if not value.is_absolute():
            raise EncodingError(field_name, f"relative path '{value}' has no URI form")
        return value.as_uri()
    if isinstance(value, float) and not math.isfinite(value):
        raise EncodingError(field_name, f"{value!r} is not representable in JSON")
    return value


class FluxTrainingInput(BaseModel):
    """
    Input parameters for a Flux LoRA training run.

    Attributes are snake_case and are sent under the same names. The SDK's
    camelCase names (``inputImages``, ``loraRank``, ...) are accepted as aliases.
    Only ``input_images`` is required; anything left as None is omitted from the
    request body so the trainer applies its own default.

    Use to_wire_format() to build the request body. model_dump(by_alias=True)
    produces the camelCase names, which the trainer does not accept.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Required
    input_images: Union[AnyUrl, Path, str] = Field(
        ...,
        alias="inputImages",
        description="Zip of training images. Captions go in one .txt per image with the same base filename, e.g. my-photo.jpg -> my-photo.txt",
    )

    # Optional
    autocaption: Optional[bool] = Field(None, strict=True, description="Automatically caption images")
    autocaption_prefix: Optional[str] = Field(
        None, alias="autocaptionPrefix", description="Text prepended to every generated caption, e.g. 'a photo of TOK, '"
    )
    autocaption_suffix: Optional[str] = Field(
        None, alias="autocaptionSuffix", description="Text appended to every generated caption, e.g. ' in the style of TOK'"
    )
    layers_to_optimize_regex: Optional[str] = Field(
        None,
        alias="layersToOptimizeRegex",
        description="Regex selecting the layers to train, e.g. 'transformer.single_transformer_blocks.(7|12|16|20).proj_out'",
    )
    learning_rate: Optional[float] = Field(None, alias="learningRate", strict=True, description="Server default: 0.0004")
    lora_rank: Optional[int] = Field(
        None, alias="loraRank", strict=True, description="Higher ranks train slower but capture more detail. Server default: 16"
    )
    steps: Optional[int] = Field(
        None, strict=True, description="Number of training steps, 3-6000 (checked by the trainer). Server default: 1000"
    )
    trigger_word: Optional[str] = Field(
        None, alias="triggerWord", description="Token associated with the trained concept, e.g. 'TOK' or 'CYBRPNK'"
    )

    def to_wire_format(self) -> Dict[str, Any]:
        """
        Builds the JSON body for the trainer.

        Raises EncodingError naming the field if a value has no JSON form.
        """
        body = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            if value is None:
                continue
            body[field_name] = _encode_value(field_name, value)
        return body


class TrainingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: str = Field(..., description="Model that receives the trained weights, as 'owner/model-name'")
    input: FluxTrainingInput
    webhook: Optional[str] = None
    webhook_events_filter: Optional[List[str]] = None # e.g. ["start", "completed"]

    def to_wire_format(self) -> Dict[str, Any]:
        body = {"destination": self.destination, "input": self.input.to_wire_format()}
        if self.webhook is not None:
            body["webhook"] = self.webhook
        if self.webhook_events_filter is not None:
            body["webhook_events_filter"] = list(self.webhook_events_filter)
        return body


class TrainingJob(BaseModel):
    id: str
    status: str
    model: Optional[str] = None
    version: Optional[str] = None
    created_at: Optional[datetime] = None
    error: Optional[str] = None
    logs: Optional[str] = None
    output: Optional[Dict[str, Any]] = None # {"version": ..., "weights": ...} once succeeded
    urls: Dict[str, str] = {}

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_TRAINING_STATUSES
