from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

from utils.money import quantize

# Amounts go over the wire as numbers with two decimals, not pydantic's default Decimal strings
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(quantize(v)), return_type=float, when_used="json"),
]
