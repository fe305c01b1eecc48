"""Model definitions for the chat backend."""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class ModelConfig:
    """Configuration for a specific model."""

    model_id: str
    display_name: str
    provider: str


# All supported models, in selector order
MODELS: Dict[str, ModelConfig] = {
    "gpt-4o": ModelConfig(
        model_id="gpt-4o",
        display_name="GPT-4o",
        provider="openai",
    ),
    "o3": ModelConfig(
        model_id="o3",
        display_name="o3",
        provider="openai",
    ),
}


def get_model(model_id: str) -> Optional[ModelConfig]:
    """Get model configuration by ID.

    Args:
        model_id: The model identifier

    Returns:
        ModelConfig if found, None otherwise
    """
    return MODELS.get(model_id)


def get_available_models() -> List[ModelConfig]:
    """Get all models offered in the selector."""
    return list(MODELS.values())
