from typing import BinaryIO, Protocol


class CompressionProvider(Protocol):
    name: str

    def wrap(self, stream: BinaryIO) -> BinaryIO: ...


class CompressionRegistry(Protocol):
    def lookup(self, name: str | None) -> CompressionProvider | None: ...

    def names(self) -> list[str]: ...
