"""FastAPI interface for the citation generator.

Run with:
    uvicorn apa_citations.web:app --reload
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.responses import JSONResponse, Response

from .app import CitationGeneratorApp
from .config import GeneratorConfig
from .exporters import result_to_dict
from .logging import RunLog
from .models import GenerationResult

app = FastAPI(
    title="APA Citation Generator",
    description="Convert CSV or Google Sheets source lists into APA 7 citations",
)

OUTPUT_FILENAME = "apa7_citations_output.csv"


def _build_generator() -> CitationGeneratorApp:
    return CitationGeneratorApp(config=GeneratorConfig.from_env())


async def _read_upload(upload: Optional[UploadFile]) -> Optional[bytes]:
    if upload is None or not upload.filename:
        return None
    return await upload.read()


async def _run(
    csv_file: Optional[UploadFile],
    sheet_url: Optional[str],
    style_file: Optional[UploadFile],
    generator: CitationGeneratorApp,
) -> GenerationResult:
    csv_data = await _read_upload(csv_file)
    style_data = await _read_upload(style_file)
    return generator.generate(
        csv_text=csv_data,
        sheet_url=sheet_url or None,
        style_text=style_data,
        log=RunLog(),
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/generate")
async def generate(
    csv_file: Optional[UploadFile] = File(None),
    sheet_url: Optional[str] = Form(None),
    style_file: Optional[UploadFile] = File(None),
    debug: bool = Form(False),
) -> JSONResponse:
    """Generate citations and return the structured result."""

    with _build_generator() as generator:
        result = await _run(csv_file, sheet_url, style_file, generator)
    status_code = 200 if result.success else 422
    return JSONResponse(result_to_dict(result, include_debug=debug), status_code=status_code)


@app.post("/generate/csv")
async def generate_csv(
    csv_file: Optional[UploadFile] = File(None),
    sheet_url: Optional[str] = Form(None),
    style_file: Optional[UploadFile] = File(None),
) -> Response:
    """Generate citations and return the augmented CSV as a download."""

    with _build_generator() as generator:
        result = await _run(csv_file, sheet_url, style_file, generator)
        if not result.rows:
            return JSONResponse({"errors": list(result.errors)}, status_code=422)
        content = generator.export_csv(result)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{OUTPUT_FILENAME}"'},
    )


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("apa_citations.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]
