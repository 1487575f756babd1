from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class StateImage:
    mime_type: str
    data_base64: str
    data_url: str
    width: int
    height: int

    @classmethod
    def from_png_bytes(cls, data: bytes, *, width: int, height: int) -> "StateImage":
        b64 = base64.b64encode(data).decode("ascii")
        return cls(
            mime_type="image/png",
            data_base64=b64,
            data_url=f"data:image/png;base64,{b64}",
            width=width,
            height=height,
        )

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data_base64)

    def write(self, path: Path) -> Path:
        path.write_bytes(self.to_bytes())
        return path
