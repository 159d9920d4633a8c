from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.extraction.prescription_extractor import extract_prescription
from app.ocr.paddle_engine import PrescriptionOcrEngine

logger = logging.getLogger(__name__)


class EmptyOcrTextError(ValueError):
    """Raised when OCR returns no readable text for an upload."""
    pass


# =============================================================================
# Prescription Processing Pipeline
# =============================================================================
def process_prescription_text(raw_text: Optional[str]) -> Dict[str, Any]:
    """Build the prescription response payload from OCR text.

    Args:
        raw_text: OCR output, passed through unmodified as ``rawText``

    Returns:
        Dict with ``rawText``, ``medicines`` and ``doctor``
    """
    raw_text = raw_text or ""
    result = extract_prescription(raw_text)

    if result.has_medicines:
        logger.info(f"Extracted {len(result.medicines)} medicines, doctor: {result.doctor}")
    else:
        logger.info("No medicine lines detected in OCR text")

    payload: Dict[str, Any] = {"rawText": raw_text}
    payload.update(result.to_dict())
    return payload


def process_prescription_image(image_bytes: bytes, engine: PrescriptionOcrEngine) -> Dict[str, Any]:
    """Run OCR on an uploaded image, then extract medicines from the text.

    Business rules enforced:
    - Blank OCR output is a user-facing error, not an empty prescription.
    - ``rawText`` is the OCR text exactly as recognized.

    Args:
        image_bytes: Uploaded file contents
        engine: An open (``with``-entered) OCR engine

    Returns:
        Prescription payload (see ``process_prescription_text``)

    Raises:
        EmptyOcrTextError: If OCR produced no text
        ImageDecodeError: If the upload is not a readable image
        OcrError: If the OCR engine fails
    """
    raw_text = engine.recognize(image_bytes)

    if not raw_text or not raw_text.strip():
        raise EmptyOcrTextError("Could not read prescription text")

    return process_prescription_text(raw_text)


if __name__ == "__main__":
    """
    CLI entry point for prescription extraction.

    Usage:
        python -m app.main --image prescription.jpg
        python -m app.main --text ocr_output.txt
    """
    import argparse
    import json
    import sys
    from pathlib import Path

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    parser = argparse.ArgumentParser(
        description="Prescription OCR and medicine extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m app.main --image scans/rx_001.jpg
  python -m app.main --text samples/rx_001.txt --reduced
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--image",
        type=str,
        help="Path to a prescription image (PNG/JPEG)"
    )
    source.add_argument(
        "--text",
        type=str,
        help="Path to a text file holding OCR output"
    )
    parser.add_argument(
        "--reduced",
        action="store_true",
        help="Only use unit/frequency abbreviations when classifying lines (text mode)"
    )

    args = parser.parse_args()
    input_path = Path(args.image or args.text)

    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        sys.exit(1)

    try:
        if args.image:
            with PrescriptionOcrEngine() as ocr_engine:
                output = process_prescription_image(input_path.read_bytes(), ocr_engine)
        else:
            text = input_path.read_text(encoding="utf-8")
            if args.reduced:
                output = {"rawText": text}
                output.update(extract_prescription(text, include_synonyms=False).to_dict())
            else:
                output = process_prescription_text(text)
    except Exception as e:
        logger.error(f"Failed to process prescription: {e}", exc_info=True)
        sys.exit(1)

    print(json.dumps(output, indent=2, ensure_ascii=False))
