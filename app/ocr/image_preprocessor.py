"""Image Preprocessing for OCR.

Prepares uploaded prescription images for OCR by applying grayscale conversion
and adaptive thresholding. Works on in-memory buffers; nothing touches disk.
"""

import cv2
import numpy as np


class ImageDecodeError(ValueError):
    """Raised when an upload cannot be decoded as an image."""
    pass


def decode_image(image_bytes: bytes) -> np.ndarray:
    """Decode an uploaded image buffer into a BGR array.
    
    Args:
        image_bytes: Raw file contents (PNG, JPEG, ...)
    
    Returns:
        np.ndarray: BGR image
        
    Raises:
        ImageDecodeError: If the buffer is empty or not a readable image
    """
    if not image_bytes:
        raise ImageDecodeError("Empty image buffer")
    
    buffer = np.frombuffer(image_bytes, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    
    if image is None:
        raise ImageDecodeError(
            f"Unable to decode image ({len(image_bytes)} bytes). "
            f"Check the file is a PNG or JPEG and is not corrupted."
        )
    return image


def preprocess_image(image_bytes: bytes) -> np.ndarray:
    """Preprocess an uploaded image for OCR.
    
    Preprocessing steps:
    - Convert to grayscale
    - Apply adaptive thresholding for better OCR accuracy
    - Convert back to 3 channels (PaddleOCR expects BGR input)
    
    Args:
        image_bytes: Raw file contents
    
    Returns:
        np.ndarray: Preprocessed BGR image
        
    Raises:
        ImageDecodeError: If the buffer cannot be decoded
        RuntimeError: If OpenCV preprocessing fails
    """
    image = decode_image(image_bytes)
    
    try:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        
        processed = cv2.adaptiveThreshold(
            gray,
            255,
            cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY,
            31,
            2
        )
        return cv2.cvtColor(processed, cv2.COLOR_GRAY2BGR)
    except cv2.error as e:
        raise RuntimeError(
            f"Image preprocessing failed: {type(e).__name__}: {str(e)}"
        ) from e
