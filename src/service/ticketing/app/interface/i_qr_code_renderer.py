from abc import ABC, abstractmethod


class IQrCodeRenderer(ABC):
    @abstractmethod
    def render_png_base64(self, content: str) -> str:
        """Encode content as a QR code and return the PNG as base64 text."""
        pass
