"""
PDF Service - HTML to PDF conversion over HTTP.

Validates an HTML document request, renders it in a single-use headless
Chromium session driven by Playwright and returns the PDF base64-encoded
in a JSON envelope.
"""

__version__ = "1.0.0"
