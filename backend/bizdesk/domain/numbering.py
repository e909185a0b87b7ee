"""Sequential document numbers, e.g. ORC0007 for quotes and PED0012 for orders."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentNumbering:
    quote_prefix: str = "ORC"
    order_prefix: str = "PED"
    width: int = 4

    def quote_number(self, sequence: int) -> str:
        return f"{self.quote_prefix}{sequence:0{self.width}d}"

    def order_number(self, sequence: int) -> str:
        return f"{self.order_prefix}{sequence:0{self.width}d}"
