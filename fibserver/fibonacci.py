from typing import Optional

from .guard import Aborted, LockError, Mutex

# u128 felső határa
U128_MAX = 2**128 - 1


class FibonacciError(Exception):
    message = "fibonacci error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class FibonacciLockError(FibonacciError):
    message = "unable to lock fibonacci state"


class AdditionOverflow(FibonacciError, Aborted):
    message = "addition overflow occurred"


# Az utolsó két tag, ebből jön a következő Fibonacci szám
class FibonacciState:
    def __init__(self, prev: int = 1, curr: int = 0):
        self.prev = prev
        self.curr = curr

    def next(self) -> int:
        # túlcsordulásnál az állapot változatlan marad
        nxt = self.curr + self.prev
        if nxt > U128_MAX:
            raise AdditionOverflow()
        self.prev = self.curr
        self.curr = nxt
        return nxt


def next_fibonacci(current_fibonacci: Mutex[FibonacciState]) -> int:
    try:
        with current_fibonacci.lock() as state:
            return state.next()
    except LockError as e:
        raise FibonacciLockError() from e
