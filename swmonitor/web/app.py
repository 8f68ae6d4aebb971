import os

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, FileResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path

from swmonitor.services.api import app as api_app

root = Path(__file__).resolve().parent

app = FastAPI(title="service worker lifecycle monitor web", lifespan=api_app.router.lifespan_context)

# "/" must be registered BEFORE the catch-all mount("") or it gets intercepted
@app.get("/", response_class=HTMLResponse)
def index():
    return (root / "templates" / "index.html").read_text(encoding="utf-8")

# worker script lives at the site root so its scope covers the whole page
@app.get("/sw.js")
def worker_script():
    return FileResponse(root / "static" / "sw.js", media_type="application/javascript",
                        headers={"Service-Worker-Allowed": "/"})

# serve static files
app.mount("/static", StaticFiles(directory=str(root / "static")), name="static")

# mount API sub-app last: catch-all prefix "" would shadow routes above it
app.mount("", api_app)


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    print(f"Lifecycle monitor starting on http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
