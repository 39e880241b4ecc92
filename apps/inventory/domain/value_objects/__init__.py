# Value objects
from .movement_origin import MovementAction, MovementOrigin, OriginatorKind

__all__ = ['MovementAction', 'MovementOrigin', 'OriginatorKind']
