"""
Text Extractor Configuration

Module-specific settings for document text extraction.
"""
import os

# =========================
# File Processing Settings
# =========================

# Media types accepted for extraction
EXTRACTOR_SUPPORTED_MEDIA_TYPES = {"application/pdf", "application/x-pdf"}

# Separator placed between page texts
EXTRACTOR_PAGE_SEPARATOR = "\n\n"

# =========================
# Processing Limits
# =========================

# 0 disables a limit
EXTRACTOR_MAX_FILE_SIZE_MB = int(os.getenv("EXTRACTOR_MAX_FILE_SIZE_MB", "50"))
EXTRACTOR_MAX_PAGES = int(os.getenv("EXTRACTOR_MAX_PAGES", "500"))
