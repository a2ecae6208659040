import base64
from io import BytesIO

import qrcode

from src.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer


class QrCodeRendererImpl(IQrCodeRenderer):
    """PNG QR codes, black on white, roughly 200px for a typical verification URL."""

    def __init__(self, *, box_size: int = 4, border: int = 2) -> None:
        self.box_size = box_size
        self.border = border

    def render_png_base64(self, content: str) -> str:
        qr = qrcode.QRCode(box_size=self.box_size, border=self.border)
        qr.add_data(content)
        qr.make(fit=True)
        img = qr.make_image(fill_color='black', back_color='white')

        buffered = BytesIO()
        img.save(buffered, format='PNG')
        return base64.b64encode(buffered.getvalue()).decode('ascii')
