"""
Setup script for the html-to-pdf service.

Allows development installation with `pip install -e .[test]`
"""

from setuptools import setup, find_packages

setup(
    name="html-pdf-service",
    version="1.0.0",
    description="HTTP service converting HTML documents to PDF with Playwright/Chromium",
    packages=find_packages(include=["pdf_service", "pdf_service.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.100",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "playwright>=1.40",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "httpx>=0.24",
        ],
    },
)
