"""Class decorators that generate the Keyed and Labeled capabilities.

    from dataclasses import dataclass
    from dbent import Key, Label, keyed, labeled

    @labeled
    @keyed
    @dataclass
    class Customer:
        id: Key[int]
        name: Label[str]

    Customer(Key.new(1), "Ada").tag().unwrap()   # Tag(key='1', label='Ada')
"""

from dbent.derive.keyed import keyed
from dbent.derive.labeled import labeled
from dbent.derive.tagged import attach_tagged

__all__ = [
    "keyed",
    "labeled",
    "attach_tagged",
]
