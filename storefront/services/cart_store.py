from typing import List, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from storefront.core.exceptions import CartStorageError
from storefront.schemas.cart import AddToCartResult, CartLineItem, LineKey
from storefront.schemas.product import ProductSnapshot
from storefront.services.cart_storage import CartStorage

logger = structlog.get_logger()

_LINES = TypeAdapter(List[CartLineItem])
_LINE_ONLY_FIELDS = ("quantity", "selected_size", "selected_color", "selectedSize", "selectedColor")


def _as_option(value) -> Optional[str]:
    # option lists hold text, so a selection of 38 must match "38"
    if value is None:
        return None
    return str(value).strip() or None


class CartStore:
    """
    In-process cart for one browser session.

    The in-memory line list is the source of truth. Every mutation rewrites the
    whole list to ``storage``; an empty cart removes the stored slot. Storage
    failures are logged and never undo the in-memory change.
    """

    def __init__(self, storage: CartStorage):
        self.storage = storage
        self._lines: List[CartLineItem] = self._load()

    # ------------------------------------------------------------------
    # Derived readers
    # ------------------------------------------------------------------
    @property
    def items(self) -> List[CartLineItem]:
        return [line.model_copy() for line in self._lines]

    @property
    def total_item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def subtotal(self) -> int:
        return sum(line.line_total for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def get_line(self, key: LineKey) -> Optional[CartLineItem]:
        line = self._find(key)
        return line.model_copy() if line else None

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def add_to_cart(
        self,
        product,
        quantity: Optional[int] = 1,
        selected_size: Optional[str] = None,
        selected_color: Optional[str] = None,
    ) -> AddToCartResult:
        """
        Add a product configuration, merging into an identical line if present.

        The add is rejected (cart untouched) when the product declares sizes or
        colors and no option from the matching list was selected; the result
        names the missing options so the caller can prompt for them.
        """
        snapshot = ProductSnapshot.model_validate(product)
        quantity = 1 if quantity is None else quantity

        if quantity < 1:
            logger.info("cart_add_rejected", product_id=snapshot.id, reason="quantity", quantity=quantity)
            return AddToCartResult(accepted=False)

        selected_size = _as_option(selected_size)
        selected_color = _as_option(selected_color)

        missing = []
        if snapshot.sizes:
            if selected_size not in snapshot.sizes:
                missing.append("size")
        else:
            selected_size = None
        if snapshot.colors:
            if selected_color not in snapshot.colors:
                missing.append("color")
        else:
            selected_color = None

        if missing:
            logger.info("cart_add_rejected", product_id=snapshot.id, reason="variant", missing_options=missing)
            return AddToCartResult(accepted=False, missing_options=tuple(missing))

        key = LineKey(snapshot.id, selected_size, selected_color)
        index = self._index(key)
        if index is not None:
            existing = self._lines[index]
            line = existing.model_copy(update={"quantity": existing.quantity + quantity})
            self._lines[index] = line
        else:
            data = snapshot.model_dump()
            for field in _LINE_ONLY_FIELDS:
                data.pop(field, None)
            line = CartLineItem(
                **data,
                quantity=quantity,
                selected_size=selected_size,
                selected_color=selected_color,
            )
            self._lines.append(line)

        self._persist()
        return AddToCartResult(accepted=True, line=line.model_copy())

    def remove_from_cart(self, product_id: int) -> int:
        """Remove every line of ``product_id`` regardless of variant. Returns lines removed."""
        remaining = [line for line in self._lines if line.id != product_id]
        removed = len(self._lines) - len(remaining)
        if removed:
            self._lines = remaining
            self._persist()
        return removed

    def update_quantity(self, product_id: int, quantity: int) -> bool:
        """Set the quantity of every line of ``product_id``. Quantities below 1 are rejected."""
        if quantity < 1:
            logger.info("cart_update_rejected", product_id=product_id, quantity=quantity)
            return False

        matched = False
        for index, line in enumerate(self._lines):
            if line.id == product_id:
                self._lines[index] = line.model_copy(update={"quantity": quantity})
                matched = True

        if matched:
            self._persist()
        return matched

    def remove_line(self, key: LineKey) -> bool:
        index = self._index(key)
        if index is None:
            return False
        del self._lines[index]
        self._persist()
        return True

    def update_line_quantity(self, key: LineKey, quantity: int) -> bool:
        if quantity < 1:
            logger.info("cart_update_rejected", product_id=key.product_id, quantity=quantity)
            return False
        index = self._index(key)
        if index is None:
            return False
        self._lines[index] = self._lines[index].model_copy(update={"quantity": quantity})
        self._persist()
        return True

    def clear_cart(self) -> None:
        self._lines = []
        self._persist()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _index(self, key: LineKey) -> Optional[int]:
        for index, line in enumerate(self._lines):
            if line.key == key:
                return index
        return None

    def _find(self, key: LineKey) -> Optional[CartLineItem]:
        index = self._index(key)
        return self._lines[index] if index is not None else None

    def _load(self) -> List[CartLineItem]:
        try:
            payload = self.storage.load()
        except CartStorageError as exc:
            logger.warning("cart_load_failed", key=self.storage.key, error=str(exc))
            return []

        if not payload or not payload.strip():
            return []

        try:
            return _LINES.validate_json(payload)
        except ValidationError as exc:
            logger.warning(
                "cart_load_discarded",
                key=self.storage.key,
                error_count=exc.error_count(),
            )
            self._clear_storage()
            return []

    def _persist(self) -> None:
        if not self._lines:
            self._clear_storage()
            return
        try:
            self.storage.save(_LINES.dump_json(self._lines, by_alias=True, exclude_none=True))
        except CartStorageError as exc:
            logger.error("cart_persist_failed", key=self.storage.key, error=str(exc))

    def _clear_storage(self) -> None:
        try:
            self.storage.clear()
        except CartStorageError as exc:
            logger.error("cart_clear_failed", key=self.storage.key, error=str(exc))
