from pathlib import Path
import os
import uvicorn


if __name__ == "__main__":
    # Local runner; needs FIXER_API_KEY and DATABASE_URL (see .env.example)
    root = Path(__file__).resolve().parent
    # Reload workers must be able to import backend/ and currency_converter/
    existing = os.environ.get("PYTHONPATH", "")
    if str(root) not in existing.split(os.pathsep):
        os.environ["PYTHONPATH"] = (existing + (os.pathsep if existing else "") + str(root))
    uvicorn.run(
        "backend.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        reload=True,
        app_dir=str(root),
        reload_dirs=[str(root / "backend"), str(root / "currency_converter")],
        log_level="info",
    )
