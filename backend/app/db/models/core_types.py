import enum


class ItemStatus(str, enum.Enum):
    available = "Available"
    sold = "Sold"

    @classmethod
    def for_quantity(cls, quantity: int) -> "ItemStatus":
        # seule source du statut : SOLD <=> quantity == 0
        return cls.sold if quantity == 0 else cls.available
