from typing import Iterable, Iterator

from .errors import TrainNotFoundError
from .models import Train


class TrainRegistry:
    """Ordered collection of trains.

    IDs are not checked for uniqueness on insert; lookups return the first match,
    so a later train with a repeated ID is shadowed.
    """

    def __init__(self, trains: Iterable[Train] = ()):
        self._trains: list[Train] = list(trains)

    def __iter__(self) -> Iterator[Train]:
        return iter(self._trains)

    def __len__(self) -> int:
        return len(self._trains)

    def add(self, train: Train) -> None:
        self._trains.append(train)

    def find_mutable_by_id(self, train_id: int) -> Train:
        for train in self._trains:
            if train.train_id == train_id:
                return train
        raise TrainNotFoundError(train_id)

    # Read path; same object as the mutable lookup.
    find_by_id = find_mutable_by_id

    def replace_all(self, trains: Iterable[Train]) -> None:
        self._trains = list(trains)

    def ids(self) -> list[int]:
        return [train.train_id for train in self._trains]
