from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from pathlib import Path
import json
import os
import re

app = FastAPI(title="Mock Analysis Server", version="1.0.0")
# Support both local development and Docker
REPORTS_DIR = Path("/analysis_stub") if os.path.exists("/analysis_stub") else Path(__file__).resolve().parent / "reports"
DEFAULT_REPORT = "sample"
# Report names are bare file stems; anything else (paths, dots) gets the default report
REPORT_NAME = re.compile(r"^[\w-]+$")


class AnalyzeBody(BaseModel):
    content: str
    mime_type: str = Field(alias="mimeType")


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/api/analyze")
def analyze(body: AnalyzeBody):
    # Canned responses: content naming a stub report selects it, anything else gets the default
    if not body.content.strip():
        raise HTTPException(status_code=400, detail="Missing content or mimeType in request body")
    requested = body.content.strip()
    if REPORT_NAME.match(requested) and (REPORTS_DIR / f"{requested}.json").is_file():
        name = requested
    else:
        name = DEFAULT_REPORT
    return JSONResponse(content=json.loads((REPORTS_DIR / f"{name}.json").read_text()))
