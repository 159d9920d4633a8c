"""PaddleOCR wrapper for prescription images.

The engine is a per-request resource: enter it with ``with`` (or through the
``get_ocr_engine`` FastAPI dependency) and it is released on exit. There is no
module-level OCR instance.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional, Tuple

from app import config
from app.ocr.image_preprocessor import preprocess_image

logger = logging.getLogger(__name__)


class OcrError(RuntimeError):
    """Raised when the OCR engine cannot produce text for an image."""
    pass


# Boxes whose top edges are this close (pixels) belong to one printed row
ROW_Y_THRESHOLD = 18


def _get_min_coord(box, axis: int) -> float:
    """Extract the minimum X (axis=0) or Y (axis=1) coordinate from a bounding box"""
    if box is None:
        return 0
    try:
        if len(box) > 0:
            first = box[0]
            if hasattr(first, "__len__"):
                # Box format: [[x1,y1], [x2,y2], [x3,y3], [x4,y4]]
                return float(min(point[axis] for point in box))
            elif len(box) >= 2:
                # Flat format: [x1, y1, x2, y2, ...]
                return float(box[axis])
        return 0
    except (IndexError, TypeError, ValueError):
        return 0


def _get_top_y(box) -> float:
    return _get_min_coord(box, 1)


def _get_left_x(box) -> float:
    return _get_min_coord(box, 0)


def _extract_page_data(page_res) -> List[Tuple[Any, str]]:
    """
    Normalize one PaddleOCR page result into (box, text) pairs.
    Handles the classic 2.x list format and the 3.x dict/result objects.
    """
    if page_res is None:
        return []

    # Classic PaddleOCR 2.x: [[box, (text, conf)], ...]
    if isinstance(page_res, list):
        pairs = []
        for line in page_res:
            if isinstance(line, (list, tuple)) and len(line) > 1:
                text_info = line[1]
                text = text_info[0] if isinstance(text_info, (list, tuple)) else text_info
                pairs.append((line[0], str(text)))
        return pairs

    res_dict = page_res
    if not isinstance(page_res, dict) and hasattr(page_res, "to_dict"):
        res_dict = page_res.to_dict()
    elif not isinstance(page_res, dict) and hasattr(page_res, "res"):
        res_dict = page_res.res

    if not isinstance(res_dict, dict):
        return []

    # 'rec_texts' and 'rec_polys' (PaddleOCR 3.x predict)
    if "rec_texts" in res_dict:
        texts = res_dict.get("rec_texts") or []
        boxes = res_dict.get("rec_polys")
        if boxes is None:
            boxes = res_dict.get("dt_polys")
        if boxes is None:
            boxes = []
        return [(boxes[i] if i < len(boxes) else None, str(text)) for i, text in enumerate(texts)]

    # 'dt_polys' and 'rec_res'
    if "dt_polys" in res_dict and "rec_res" in res_dict:
        return [
            (box, str(rec[0] if isinstance(rec, (list, tuple)) else rec))
            for box, rec in zip(res_dict["dt_polys"], res_dict["rec_res"])
        ]

    return []


def _group_boxes_into_rows(pairs, y_threshold: float = ROW_Y_THRESHOLD) -> List[List[Tuple[Any, str]]]:
    """
    Group (box, text) pairs into printed rows by top-Y proximity.
    Pairs without a usable box each form their own row.
    """
    if not pairs:
        return []

    # Stable sort keeps engine order for boxes sharing a Y coordinate
    sorted_pairs = sorted(pairs, key=lambda pair: _get_top_y(pair[0]))

    rows = []
    current_row = [sorted_pairs[0]]
    for pair in sorted_pairs[1:]:
        prev_y = _get_top_y(current_row[-1][0])
        curr_y = _get_top_y(pair[0])
        if prev_y == 0 or curr_y == 0:
            rows.append(current_row)
            current_row = [pair]
            continue
        if abs(curr_y - prev_y) <= y_threshold:
            current_row.append(pair)
        else:
            rows.append(current_row)
            current_row = [pair]
    rows.append(current_row)
    return rows


def results_to_text(results, y_threshold: float = ROW_Y_THRESHOLD) -> str:
    """Rebuild physical text lines from OCR boxes.

    Boxes on one row are ordered left-to-right and joined with spaces; rows
    are ordered top-to-bottom and joined with newlines, page after page.
    """
    if not results:
        return ""

    lines = []
    for page_res in results:
        pairs = [(box, text.strip()) for box, text in _extract_page_data(page_res) if text.strip()]
        for row in _group_boxes_into_rows(pairs, y_threshold):
            row.sort(key=lambda pair: _get_left_x(pair[0]))
            lines.append(" ".join(text for _, text in row))

    return "\n".join(lines)


class PrescriptionOcrEngine:
    """Scoped PaddleOCR engine.

    Usage:
        with PrescriptionOcrEngine() as engine:
            text = engine.recognize(image_bytes)
    """

    def __init__(self, lang: Optional[str] = None, use_angle_cls: Optional[bool] = None):
        self.lang = lang or config.OCR_LANG
        self.use_angle_cls = config.OCR_USE_ANGLE_CLS if use_angle_cls is None else use_angle_cls
        self._ocr = None
        self._open = False

    def __enter__(self) -> "PrescriptionOcrEngine":
        self._open = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._ocr is not None:
            logger.debug("Released PaddleOCR engine")
        self._ocr = None
        self._open = False

    def _ensure_initialized(self) -> None:
        """Load the PaddleOCR model on first use inside the ``with`` block."""
        if not self._open:
            raise OcrError("OCR engine used outside of its 'with' block")
        if self._ocr is not None:
            return

        try:
            from paddleocr import PaddleOCR
        except ImportError as e:
            raise OcrError("PaddleOCR is not installed: pip install paddleocr paddlepaddle") from e

        logger.info(f"Loading PaddleOCR (lang={self.lang}, angle_cls={self.use_angle_cls})")
        try:
            self._ocr = PaddleOCR(use_angle_cls=self.use_angle_cls, lang=self.lang)
        except Exception as e:
            raise OcrError(f"PaddleOCR failed to initialize: {e}") from e

    def recognize(self, image_bytes: bytes) -> str:
        """Run OCR over an uploaded image and return one newline-joined text block.

        Raises:
            ImageDecodeError: If the upload is not a readable image
            OcrError: If the engine is not open or recognition fails
        """
        if not self._open:
            raise OcrError("OCR engine used outside of its 'with' block")

        image = preprocess_image(image_bytes)
        self._ensure_initialized()

        try:
            results = self._ocr.predict(image)
        except Exception as e:
            raise OcrError(f"OCR failed: {type(e).__name__}: {e}") from e

        text = results_to_text(results)
        logger.info(f"OCR recognized {len(text)} characters")
        return text


def get_ocr_engine() -> Iterator[PrescriptionOcrEngine]:
    """FastAPI dependency yielding an OCR engine scoped to one request."""
    with PrescriptionOcrEngine() as engine:
        yield engine
