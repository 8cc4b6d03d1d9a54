from abc import ABCMeta, abstractmethod
from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable

Expression: TypeAlias = str
CronFactory: TypeAlias = Callable[[Expression], "CronParser"]


@runtime_checkable
class CronParser(Protocol, metaclass=ABCMeta):
    @property
    @abstractmethod
    def expression(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        raise NotImplementedError

    @property
    @abstractmethod
    def error_msg(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def raise_for_error(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def next_run(self, *, now: int) -> int:
        raise NotImplementedError
