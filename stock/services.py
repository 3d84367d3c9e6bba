"""
Stock — Service Layer

MovementLedger: append-only access to StockMovement.
StockService: the transaction engine. A movement is validated against
the locked product row, then the ledger row and the new stock figure
are written in one unit of work. Concurrent movements on the same
product serialize on that row; different products never contend.
INSERT ONLY — never update or delete StockMovement.

@file stock/services.py
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Case, IntegerField, Sum, Value, When
from django.utils import timezone

from core.constants import DEFAULT_PAGE_SIZE, INITIAL_STOCK_REASON, MAX_STOCK_QUANTITY
from core.db import tracked_connection
from core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    TransactionFailure,
)
from core.filters import apply_filterset
from core.pagination import paginate
from products.models import Product
from products.services import ProductService

from .filters import StockMovementFilter
from .models import StockMovement

logger = logging.getLogger('stockledger')

Direction = StockMovement.Direction

REASON_MAX_LENGTH = StockMovement._meta.get_field('reason').max_length


class MovementResult(NamedTuple):
    new_stock: int
    movement: StockMovement


class StaleStockError(Exception):
    """The compare-and-set stock write lost against a concurrent writer."""


def _validate_direction(direction) -> str:
    if direction not in Direction.values:
        raise InvalidInputError(
            detail={'direction': f'Direction must be one of: {", ".join(Direction.values)}.'},
        )
    return str(direction)


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidInputError(detail={'quantity': 'Quantity must be a positive integer.'})
    if quantity > MAX_STOCK_QUANTITY:
        raise InvalidInputError(detail={'quantity': f'Quantity cannot exceed {MAX_STOCK_QUANTITY}.'})
    return quantity


def _validate_text(field: str, value, max_length: int | None = None) -> str:
    if value is None:
        return ''
    if not isinstance(value, str):
        raise InvalidInputError(detail={field: f'{field.capitalize()} must be a string.'})
    if max_length is not None and len(value) > max_length:
        raise InvalidInputError(detail={field: f'{field.capitalize()} is limited to {max_length} characters.'})
    return value


def _validate_unit_price(unit_price) -> Decimal | None:
    if unit_price is None or unit_price == '':
        return None
    try:
        value = Decimal(str(unit_price))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(detail={'unit_price': 'Unit price must be a number.'})
    if value < 0:
        raise InvalidInputError(detail={'unit_price': 'Unit price cannot be negative.'})
    return value


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class MovementLedger:
    """Read access to the ledger plus the engine-only append."""

    @staticmethod
    def append(
        *,
        product: Product,
        direction: str,
        quantity: int,
        unit_price: Decimal | None = None,
        reason: str = '',
        observations: str = '',
        actor=None,
    ) -> StockMovement:
        """Insert one movement. Only StockService calls this, inside its unit of work."""
        if not transaction.get_connection().in_atomic_block:
            raise RuntimeError('MovementLedger.append must run inside the stock unit of work.')
        movement = StockMovement(
            product=product,
            direction=direction,
            quantity=quantity,
            unit_price=unit_price,
            reason=reason,
            observations=observations,
            created_by=actor,
        )
        movement.save()
        return movement

    @staticmethod
    def _base_queryset():
        return StockMovement.objects.select_related('product', 'created_by').order_by('-created_at', '-id')

    @staticmethod
    def list_by_product(product_id):
        qs = apply_filterset(StockMovementFilter, {'product': product_id}, MovementLedger._base_queryset())
        return qs.filter(product_id=product_id)

    @staticmethod
    def list_by_direction(direction):
        return MovementLedger._base_queryset().filter(direction=_validate_direction(direction))

    @staticmethod
    def list_all(
        *,
        product_id=None,
        direction=None,
        page_size: int = DEFAULT_PAGE_SIZE,
        page: int = 1,
    ) -> dict:
        """Movements newest first, optionally filtered, offset-paginated."""
        qs = apply_filterset(
            StockMovementFilter,
            {'product': product_id, 'direction': direction},
            MovementLedger._base_queryset(),
        )
        return paginate(qs, page=page, page_size=page_size)

    @staticmethod
    def net_quantity(product_id) -> int:
        """SUM(incoming) - SUM(outgoing) for one product."""
        incoming = Case(
            When(direction=Direction.INCOMING, then='quantity'),
            default=Value(0),
            output_field=IntegerField(),
        )
        outgoing = Case(
            When(direction=Direction.OUTGOING, then='quantity'),
            default=Value(0),
            output_field=IntegerField(),
        )
        result = StockMovement.objects.filter(product_id=product_id).aggregate(
            in_sum=Sum(incoming),
            out_sum=Sum(outgoing),
        )
        return (result['in_sum'] or 0) - (result['out_sum'] or 0)


# ---------------------------------------------------------------------------
# Transaction engine
# ---------------------------------------------------------------------------

class StockService:
    """Applies stock movements atomically against a locked product row."""

    @staticmethod
    def _run_unit_of_work(label: str, work):
        """
        Run ``work`` inside one transaction. A lost compare-and-set rolls
        the attempt back and retries; storage errors roll back and surface
        as TransactionFailure. Domain errors propagate unchanged.
        """
        max_retries = settings.STOCK_MAX_CONCURRENCY_RETRIES
        for attempt in range(max_retries + 1):
            try:
                with tracked_connection(label=label), transaction.atomic():
                    return work()
            except StaleStockError:
                logger.warning('%s lost a concurrent stock update (attempt %d)', label, attempt + 1)
            except DatabaseError as exc:
                logger.error('%s rolled back: %s', label, exc, exc_info=True)
                raise TransactionFailure() from exc
        raise TransactionFailure(detail='Stock kept changing concurrently. Please retry.')

    @staticmethod
    def _apply_locked(
        *,
        product_id,
        direction,
        quantity,
        unit_price=None,
        reason='',
        observations='',
        actor=None,
    ) -> MovementResult:
        """Validate and apply one movement. Must run inside the unit of work."""
        product = ProductService.get_by_id(product_id, for_update=True)
        direction = _validate_direction(direction)
        quantity = _validate_quantity(quantity)
        unit_price = _validate_unit_price(unit_price)
        reason = _validate_text('reason', reason, REASON_MAX_LENGTH)
        observations = _validate_text('observations', observations)

        current = product.stock_quantity
        if direction == Direction.OUTGOING and current < quantity:
            raise InsufficientStockError(available=current, requested=quantity)
        if direction == Direction.INCOMING and current + quantity > MAX_STOCK_QUANTITY:
            raise InvalidInputError(
                detail={'quantity': f'Stock would exceed {MAX_STOCK_QUANTITY} (current: {current}).'},
            )

        new_stock = current + quantity if direction == Direction.INCOMING else current - quantity

        movement = MovementLedger.append(
            product=product,
            direction=direction,
            quantity=quantity,
            unit_price=unit_price,
            reason=reason,
            observations=observations,
            actor=actor,
        )

        now = timezone.now()
        updated = Product.objects.filter(
            pk=product.pk, stock_quantity=current,
        ).update(stock_quantity=new_stock, updated_at=now)
        if updated != 1:
            raise StaleStockError(product.pk)

        product.stock_quantity = new_stock
        product.updated_at = now
        logger.info(
            'StockMovement %s %s qty=%s product=%s stock %s -> %s by %s',
            movement.pk, direction, quantity, product.pk, current, new_stock, actor,
        )
        return MovementResult(new_stock, movement)

    @staticmethod
    def apply_movement(
        *,
        product_id,
        direction,
        quantity,
        unit_price=None,
        reason: str = '',
        observations: str = '',
        actor=None,
    ) -> MovementResult:
        """
        Record a movement and update the product's stock as one unit.

        Checks, in order: product exists and is active (404), direction
        is valid (400), quantity is a positive integer no larger than
        MAX_STOCK_QUANTITY (400), outgoing quantity is covered by current
        stock (409) and incoming quantity keeps stock within
        MAX_STOCK_QUANTITY (400). Nothing is written
        unless every check passes.
        """
        return StockService._run_unit_of_work(
            'apply_movement',
            lambda: StockService._apply_locked(
                product_id=product_id,
                direction=direction,
                quantity=quantity,
                unit_price=unit_price,
                reason=reason,
                observations=observations,
                actor=actor,
            ),
        )

    @staticmethod
    def create_product_with_initial_stock(*, actor=None, initial_quantity=0, **attributes) -> Product:
        """
        Create a product and book its initial quantity as an incoming
        movement, in the same unit of work.
        """
        if isinstance(initial_quantity, bool) or not isinstance(initial_quantity, int) or initial_quantity < 0:
            raise InvalidInputError(
                detail={'initial_quantity': 'Initial quantity must be a non-negative integer.'},
            )
        if initial_quantity > MAX_STOCK_QUANTITY:
            raise InvalidInputError(
                detail={'initial_quantity': f'Initial quantity cannot exceed {MAX_STOCK_QUANTITY}.'},
            )

        def work():
            product = ProductService.create_product(actor=actor, **attributes)
            if initial_quantity > 0:
                result = StockService._apply_locked(
                    product_id=product.pk,
                    direction=Direction.INCOMING,
                    quantity=initial_quantity,
                    unit_price=product.price,
                    reason=INITIAL_STOCK_REASON,
                    actor=actor,
                )
                product.stock_quantity = result.new_stock
            return product

        return StockService._run_unit_of_work('create_product', work)

    @staticmethod
    def get_stock(product_id) -> int:
        return ProductService.get_by_id(product_id).stock_quantity
