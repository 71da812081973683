from typing import Iterable, List

from core.gradient import ColorStop


def sort_stops(stops: Iterable[ColorStop]) -> List[ColorStop]:
    """
    Returns a new list of stops ordered by offset.
    The sort is stable, so stops sharing an offset keep their editing order.
    """
    return sorted(stops, key=lambda stop: stop.offset)
