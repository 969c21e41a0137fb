from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from .clean import clean_csv_bytes
from .errors import ParseFailure
from .models import CleanOptions, CleanResponse, HealthResponse, ViewOptions, ViewResponse
from .rules import DEFAULT_MAX_COLUMN_WIDTH
from .view import view_csv_bytes

app = FastAPI(
    title="csvtidy",
    description="Rectangularize ragged CSV and render it as a fixed-width table",
    version="0.1.0",
)


async def _read_csv_upload(file: UploadFile) -> bytes:
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")
    return await file.read()


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/clean", response_model=CleanResponse)
async def clean_csv(
    file: UploadFile = File(...),
    no_trim: bool = False,
    excel: bool = False,
    numbers: bool = False,
    verbose: bool = False,
):
    raw = await _read_csv_upload(file)
    options = CleanOptions(no_trim=no_trim, excel=excel, numbers=numbers, verbose=verbose)
    try:
        return clean_csv_bytes(raw, options)
    except ParseFailure as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@app.post("/view", response_model=ViewResponse)
async def view_csv(
    file: UploadFile = File(...),
    max_width: int = Query(DEFAULT_MAX_COLUMN_WIDTH, ge=1),
    max_rows: int = 0,
):
    raw = await _read_csv_upload(file)
    options = ViewOptions(max_width=max_width, max_rows=max(max_rows, 0))
    try:
        return view_csv_bytes(raw, options)
    except ParseFailure as exc:
        raise HTTPException(status_code=422, detail=str(exc))
