"""Application layer: building forms from blueprint documents."""

from .blueprints import (
    BlueprintGroup,
    BlueprintModel,
    GroupModel,
    OptionModel,
    build_collection,
    parse_blueprints,
)

__all__ = [
    "BlueprintGroup",
    "BlueprintModel",
    "GroupModel",
    "OptionModel",
    "build_collection",
    "parse_blueprints",
]
