#!/usr/bin/env python3
"""
Study Assistant Startup Script

Startup script with environment checking and helpful error messages.
"""
import os
import sys
import shutil
import importlib
from pathlib import Path


REQUIRED_MODULES = {
    "fastapi": "fastapi",
    "uvicorn": "uvicorn",
    "pydantic_settings": "pydantic-settings",
    "dotenv": "python-dotenv",
    "loguru": "loguru",
    "sqlalchemy": "SQLAlchemy",
    "google.generativeai": "google-generativeai",
    "fitz": "PyMuPDF",
    "docx": "python-docx",
    "PIL": "Pillow",
    "pytesseract": "pytesseract",
}


def check_environment():
    """Check if environment is properly configured"""
    print("🔍 Checking environment configuration...")

    env_file = Path(".env")
    if not env_file.exists():
        print("⚠️  .env file not found!")
        example_file = Path("env.example")
        if example_file.exists():
            shutil.copy(example_file, env_file)
            print("✅ Created .env file from example")
            print("⚠️  Please edit .env and add your GEMINI_KEYS!")
        return False

    from dotenv import load_dotenv
    load_dotenv()

    gemini_keys = os.getenv("GEMINI_KEYS")
    if not gemini_keys or gemini_keys.startswith("your_gemini"):
        print("❌ GEMINI_KEYS not configured!")
        print("🔑 Get your API keys from: https://ai.google.dev/")
        return False

    print("✅ Environment configuration looks good!")
    return True


def check_dependencies():
    """Check if required dependencies are installed"""
    print("📦 Checking dependencies...")

    missing = []
    for module, distribution in REQUIRED_MODULES.items():
        try:
            importlib.import_module(module)
            print(f"✅ {distribution}")
        except ImportError:
            missing.append(distribution)
            print(f"❌ {distribution}")

    if shutil.which("tesseract") is None:
        print("⚠️  tesseract binary not found on PATH, image OCR will fail")

    if missing:
        print(f"\n⚠️  Missing packages: {', '.join(missing)}")
        print("📥 Install with: pip install -e .")
        return False

    print("✅ All dependencies are available!")
    return True


def start_service():
    """Start the API server"""
    import uvicorn
    from study_assistant.core.config import settings

    print(f"🌟 Starting {settings.app_name} v{settings.app_version}")
    print(f"🌐 Server will be available at: http://{settings.host}:{settings.port}")
    print(f"📖 API documentation: http://{settings.host}:{settings.port}/docs")

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=True,
        log_level=settings.log_level.lower()
    )


def main():
    """Main startup function"""
    print("📚 Study Assistant Startup")
    print("=" * 50)

    if not check_environment():
        print("\n❌ Environment check failed!")
        print("Please fix the configuration and try again.")
        sys.exit(1)

    if not check_dependencies():
        print("\n❌ Dependency check failed!")
        sys.exit(1)

    print("\n🎯 All checks passed! Starting service...")
    start_service()


if __name__ == "__main__":
    main()
