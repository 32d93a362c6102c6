"""Strict pydantic base model shared by every record in the pool."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    An immutable, strictly validated pydantic model.

    Field names serialize to camel case (`latest_leaf_index` becomes
    `latestLeafIndex`) so that records dump to the same JSON shape the
    relayer and bridge collaborators exchange.

    Strict mode rejects implicit coercions: a `str` is never accepted where
    `bytes` is declared, and a `tuple` is never accepted where a `list` is.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
