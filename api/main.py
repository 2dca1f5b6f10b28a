from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
import logging, os, uuid
from pathlib import Path

from tender_assistant.ingestion import load_document_text
from tender_assistant.orchestrator import DocumentAssistant
from tender_assistant.sample import SAMPLE_FILENAME, SAMPLE_TENDER_TEXT
from tender_assistant.schemas import QueryRequest, SummaryRequest, SummaryResult
from tender_assistant.summarizer import LocalSummarizer, RemoteSummarizer, SummarizerError

logger = logging.getLogger("tender_assistant.api")

app = FastAPI(title="Tender Assistant")
app.add_middleware(CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(","),
    allow_methods=["*"], allow_headers=["*"])

sessions = {}  # session_id -> {session_id, filename, assistant}
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads")); UPLOAD_DIR.mkdir(exist_ok=True)


def _session(session_id: str) -> dict:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session


def _open_session(text: str, filename: str) -> dict:
    session_id = str(uuid.uuid4())[:8]
    assistant = DocumentAssistant()
    assistant.load_text(text, source_name=filename)
    sessions[session_id] = {"session_id": session_id, "filename": filename, "assistant": assistant}
    return {"session_id": session_id, "filename": filename, "chars": len(text),
            "mode": assistant.mode}


@app.post("/summarize/local", response_model=SummaryResult)
def summarize_local(request: SummaryRequest):
    return LocalSummarizer().summarize(request.text)


@app.post("/summarize/remote", response_model=SummaryResult)
def summarize_remote(request: SummaryRequest):
    try:
        return RemoteSummarizer().summarize(request.text)
    except SummarizerError as e:
        raise HTTPException(status_code=502, detail=str(e))


@app.post("/sessions")
async def upload(file: UploadFile = File(...)):
    filename = Path(file.filename or "document.pdf").name
    doc_path = UPLOAD_DIR / f"{uuid.uuid4().hex[:8]}_{filename}"
    doc_path.write_bytes(await file.read())
    try:
        text = load_document_text(str(doc_path))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        doc_path.unlink(missing_ok=True)  # the session keeps only the text
    logger.info("Uploaded %s (%d chars)", filename, len(text))
    return _open_session(text, filename)


@app.post("/sessions/sample")
def load_sample():
    return _open_session(SAMPLE_TENDER_TEXT, SAMPLE_FILENAME)


@app.get("/sessions")
def list_sessions():
    return [{"session_id": s["session_id"], "filename": s["filename"],
             "mode": s["assistant"].mode, "turns": len(s["assistant"].turns)}
            for s in sessions.values()]


@app.get("/sessions/{session_id}/text")
def get_text(session_id: str):
    return {"session_id": session_id, "text": _session(session_id)["assistant"].text}


@app.get("/sessions/{session_id}/messages")
def get_messages(session_id: str):
    return [t.model_dump() for t in _session(session_id)["assistant"].turns]


@app.post("/sessions/{session_id}/messages")
def post_message(session_id: str, request: QueryRequest):
    assistant = _session(session_id)["assistant"]
    try:
        turns = assistant.submit(request.prompt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [t.model_dump() for t in turns]


@app.post("/sessions/{session_id}/preset")
def post_preset(session_id: str):
    assistant = _session(session_id)["assistant"]
    try:
        turns = assistant.summarize_preset()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [t.model_dump() for t in turns]


@app.put("/sessions/{session_id}/mode")
def set_mode(session_id: str, mode: str):
    assistant = _session(session_id)["assistant"]
    try:
        assistant.set_mode(mode)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"session_id": session_id, "mode": assistant.mode}


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str):
    if session_id in sessions:
        del sessions[session_id]
    return {"deleted": session_id}


def main():
    import uvicorn
    logging.basicConfig(level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s", datefmt="%H:%M:%S")
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    main()
