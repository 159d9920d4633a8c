"""Startup dependency validation.

Checks all required dependencies at startup and provides clear error messages
with installation instructions if anything is missing.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Tuple

logger = logging.getLogger(__name__)


class DependencyError(Exception):
    """Raised when required dependencies are missing."""
    pass


# Format: (module_name, package_name, description)
REQUIRED_DEPENDENCIES: List[Tuple[str, str, str]] = [
    ("fastapi", "fastapi", "Web framework"),
    ("uvicorn", "uvicorn", "ASGI server"),
    ("dotenv", "python-dotenv", "Environment variables"),
    ("multipart", "python-multipart", "File upload support"),
    ("cv2", "opencv-python", "Image decoding / preprocessing"),
    ("numpy", "numpy", "Numerical computing"),
    ("paddleocr", "paddleocr", "OCR engine"),
    ("paddle", "paddlepaddle", "PaddleOCR backend"),
    ("pydantic", "pydantic", "Data validation"),
    ("requests", "requests", "HTTP client"),
]


def check_dependency(module_name: str, package_name: str | None = None) -> Tuple[bool, str]:
    """Check if a Python module is available.
    
    Args:
        module_name: Name of the module to import (e.g., 'fastapi')
        package_name: Name of the package to install (e.g., 'fastapi'). 
                     Defaults to module_name if not provided.
    
    Returns:
        Tuple of (success: bool, error_message: str)
    """
    package_name = package_name or module_name
    
    try:
        __import__(module_name)
        return True, ""
    except ImportError as e:
        error_msg = (
            f"❌ Missing Dependency: {module_name}\n"
            f"   Package: {package_name}\n"
            f"   Error: {str(e)}\n"
            f"   Fix: pip install {package_name}"
        )
        return False, error_msg


def check_all_dependencies(
    required_deps: List[Tuple[str, str, str]] | None = None,
) -> None:
    """Check all required dependencies and raise error if any are missing.
    
    Raises:
        DependencyError: If any required dependencies are missing
    """
    required_deps = REQUIRED_DEPENDENCIES if required_deps is None else required_deps
    
    missing_deps: List[str] = []
    errors: List[str] = []
    
    logger.info("🔍 Checking dependencies...")
    
    for module_name, package_name, description in required_deps:
        success, error_msg = check_dependency(module_name, package_name)
        if not success:
            missing_deps.append(package_name)
            errors.append(error_msg)
        else:
            logger.debug(f"   ✅ {description}: {module_name}")
    
    if missing_deps:
        error_report = "\n".join(errors)
        fix_command = f"pip install {' '.join(missing_deps)}"
        
        raise DependencyError(
            f"\n{'='*80}\n"
            f"❌ MISSING DEPENDENCIES DETECTED\n"
            f"{'='*80}\n\n"
            f"{error_report}\n\n"
            f"{'='*80}\n"
            f"🔧 QUICK FIX:\n"
            f"{'='*80}\n"
            f"Run the following command to install all missing dependencies:\n\n"
            f"   {fix_command}\n\n"
            f"Or install the project with its dependencies:\n\n"
            f"   pip install -e .\n\n"
            f"{'='*80}\n"
        )
    
    logger.info("✅ All dependencies available!")


def check_external_tools() -> List[str]:
    """Check external configuration and warn about anything missing.
    
    Note: These are warnings only, not hard failures.
    
    Returns:
        List of warning messages
    """
    from app import config
    
    warnings: List[str] = []
    
    if not config.USDA_API_KEY:
        warnings.append(
            "⚠️  USDA_API_KEY is not set.\n"
            "   POST /analyze-food will return 500 until it is configured.\n"
            "   Get a key: https://fdc.nal.usda.gov/api-key-signup.html"
        )
    
    for warning in warnings:
        logger.warning(warning)
    
    return warnings


if __name__ == "__main__":
    """Run dependency check as standalone script."""
    logging.basicConfig(level=logging.INFO)
    try:
        check_all_dependencies()
        check_external_tools()
        print("\n✅ All checks passed! System is ready.")
    except DependencyError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
