"""
PDF Renderer — 執行繪圖指令

把 report.layout 產生的 DocumentLayout 畫到 reportlab canvas 上。
layout 使用左上原點，reportlab 使用左下原點，這裡負責翻轉 y。
"""

from __future__ import annotations

from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from core.exceptions import AttachmentError
from report.layout import DocumentLayout, Image, Line, Rect, Text
from utils.logger import logger

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

# 文字 y 為行框頂端，換算 baseline 用的上升比例
ASCENT_RATIO = 0.8


class ReportlabRenderer:
    """將 DocumentLayout 輸出為 PDF"""

    def __init__(self, output_path: str | Path):
        self.output_path = Path(output_path)

    def render(self, layout: DocumentLayout) -> Path:
        """
        逐頁執行繪圖指令並存檔。

        已存在的檔案會直接覆寫。save() 回傳後檔案才算寫完。

        Returns:
            輸出檔路徑
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf = pdfcanvas.Canvas(
            str(self.output_path), pagesize=(layout.width, layout.height)
        )
        pdf.setTitle(layout.title)

        for page in layout.pages:
            for instruction in page.instructions:
                self._draw(pdf, instruction, layout.height)
            pdf.showPage()

        pdf.save()
        logger.info(f"[Renderer] PDF 已輸出: {self.output_path} ({len(layout.pages)} 頁)")
        return self.output_path

    # ── 各種指令 ──

    def _draw(self, pdf, instruction, page_height: float) -> None:
        if isinstance(instruction, Rect):
            self._rect(pdf, instruction, page_height)
        elif isinstance(instruction, Text):
            self._text(pdf, instruction, page_height)
        elif isinstance(instruction, Line):
            self._line(pdf, instruction, page_height)
        elif isinstance(instruction, Image):
            try:
                self._image(pdf, instruction, page_height)
            except AttachmentError as e:
                logger.debug(f"[Renderer] 略過截圖: {e}")
        else:
            raise TypeError(f"未知的繪圖指令: {type(instruction).__name__}")

    @staticmethod
    def _rect(pdf, r: Rect, page_height: float) -> None:
        pdf.setFillColor(HexColor(r.fill))
        pdf.rect(r.x, page_height - r.y - r.height, r.width, r.height, fill=1, stroke=0)

    @staticmethod
    def _text(pdf, t: Text, page_height: float) -> None:
        pdf.setFillColor(HexColor(t.color))
        pdf.setFont(FONT_BOLD if t.bold else FONT, t.size)
        baseline = page_height - t.y - t.size * ASCENT_RATIO
        if t.align == "center" and t.width is not None:
            pdf.drawCentredString(t.x + t.width / 2, baseline, t.text)
        elif t.align == "right" and t.width is not None:
            pdf.drawRightString(t.x + t.width, baseline, t.text)
        else:
            pdf.drawString(t.x, baseline, t.text)

    @staticmethod
    def _line(pdf, ln: Line, page_height: float) -> None:
        pdf.setStrokeColor(HexColor(ln.color))
        pdf.line(ln.x1, page_height - ln.y1, ln.x2, page_height - ln.y2)

    @staticmethod
    def _image(pdf, img: Image, page_height: float) -> None:
        try:
            reader = ImageReader(str(img.path))
            pdf.drawImage(
                reader,
                img.x,
                page_height - img.y - img.height,
                width=img.width,
                height=img.height,
                preserveAspectRatio=True,
                anchor="c",
            )
        except Exception as e:
            raise AttachmentError(str(img.path), e)
