# fixed, ordered registry of selectable Gemini models
# NOTE: the first entry is the default selection

from pydantic import BaseModel, ConfigDict

GEMINI_FLASH_MODEL_ID = "gemini-2.5-flash-preview-05-20"
GEMINI_PRO_MODEL_ID = "gemini-2.5-pro-preview-05-06"

class AiModel(BaseModel):
    """
    A selectable model descriptor.
    - id: short identifier like 'flash-05-20'
    - name: user-friendly display name
    - api_name: the model name sent to the provider API
    - supports_thinking_budget: whether the extended reasoning toggle applies to this model
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    api_name: str
    supports_thinking_budget: bool

MODELS: tuple[AiModel, ...] = (
    AiModel(
        id="flash-05-20",
        name="Gemini 2.5 Flash (05-20)",
        api_name=GEMINI_FLASH_MODEL_ID,
        supports_thinking_budget=True,
    ),
    AiModel(
        id="pro-05-06",
        name="Gemini 2.5 Pro (05-06)",
        api_name=GEMINI_PRO_MODEL_ID,
        supports_thinking_budget=False,
    ),
)

DEFAULT_MODEL_API_NAME = MODELS[0].api_name

def find_model(api_name: str) -> AiModel | None:
    """Return the registered model with this api name, or None."""
    return next((model for model in MODELS if model.api_name == api_name), None)

def resolve_model(api_name: str) -> AiModel:
    """Return the registered model with this api name, falling back to the default entry."""
    return find_model(api_name) or MODELS[0]
