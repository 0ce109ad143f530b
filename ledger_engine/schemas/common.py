"""
Base schema shared by every wire type.

Field names are snake_case in Python and camelCase on the wire,
so JSON exported by the bookkeeping front end (invoiceNo,
isInterState, totalTaxableAmount, ...) validates unchanged.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
