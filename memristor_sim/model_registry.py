from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from memristor_sim.errors import InvalidModelKind
from memristor_sim.models.base import MemristorModel, ModelKind, ModelType, param_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelSpec:
    kind: ModelKind
    model_type: ModelType
    description: str

    @property
    def parameters(self) -> List[str]:
        return param_names(self.model_type.params_type)


REGISTRY: Dict[ModelKind, ModelSpec] = {}


def register_model(spec: ModelSpec) -> None:
    REGISTRY[spec.kind] = spec


def resolve_kind(kind: Union[str, ModelKind]) -> ModelKind:
    if isinstance(kind, ModelKind):
        return kind
    try:
        return ModelKind(str(kind).strip().lower())
    except ValueError:
        raise InvalidModelKind(kind, [k.value for k in ModelKind]) from None


def get_model(kind: Union[str, ModelKind]) -> ModelSpec:
    resolved = resolve_kind(kind)
    try:
        return REGISTRY[resolved]
    except KeyError:
        raise InvalidModelKind(kind, [k.value for k in REGISTRY]) from None


def list_models() -> List[ModelSpec]:
    return [REGISTRY[k] for k in ModelKind if k in REGISTRY]


def create_model(
    kind: Union[str, ModelKind],
    params: Optional[Union[Mapping[str, Any], Any]] = None,
    **overrides: Any,
) -> MemristorModel:
    """Build a fresh device instance of the given kind.

    `params` may be a mapping of field names or the variant's own parameter
    record; keyword overrides are applied on top. Unknown kinds raise
    InvalidModelKind, there is no default model.
    """
    spec = get_model(kind)
    model = spec.model_type(params, **overrides)
    logger.debug("Created %r", model)
    return model
