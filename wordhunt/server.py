import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wordhunt.settings import Settings, settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordhunt")


class LoadRequest(BaseModel):
    # Relative paths resolve against BASE_DIR
    path: str


class WordsRequest(BaseModel):
    words: list[str]


class SolveRequest(BaseModel):
    # Each cell is one tile; "qu" stays a single cell
    board: list[list[str]]


def apply_log_level(cfg: Settings):
    """DEBUG forces debug logging, otherwise LOG_LEVEL applies."""
    logger.setLevel(logging.DEBUG if cfg.DEBUG else cfg.LOG_LEVEL.upper())


def resolve_dictionary_path(cfg: Settings, raw: str) -> Path:
    """Resolve a client-supplied path, refusing anything outside BASE_DIR."""
    base = Path(cfg.BASE_DIR).resolve()
    path = (base / raw).resolve()
    if not path.is_relative_to(base):
        raise HTTPException(403, "Dictionary path must be inside the service base directory")
    return path


def create_app(cfg: Settings = settings) -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        from wordhunt.dictionary import Dictionary

        apply_log_level(cfg)
        application.state.dictionary = Dictionary()
        if cfg.LOAD_ON_STARTUP:
            logger.info("Loading dictionary from %s", cfg.DICTIONARY_PATH)
            application.state.dictionary.load(cfg.DICTIONARY_PATH)
        logger.info("Dictionary ready with %d words", application.state.dictionary.word_count)

        yield

    application = FastAPI(title="Word Hunt Solver", lifespan=lifespan)

    # Handlers touching the dictionary lock are sync so they run in the threadpool
    @application.get("/health")
    def health(request: Request):
        return {"status": "ok", "word_count": request.app.state.dictionary.word_count}

    @application.post("/dictionary/load")
    def load_dictionary(body: LoadRequest, request: Request):
        from wordhunt.exceptions import DictionaryLoadError
        from wordhunt.metrics import StageTimer

        path = resolve_dictionary_path(cfg, body.path)
        timer = StageTimer("load")
        dictionary = request.app.state.dictionary
        try:
            with timer.stage("read"):
                loaded = dictionary.load(path)
        except DictionaryLoadError as e:
            logger.error("Dictionary load failed: %s", e)
            raise HTTPException(500, str(e))

        timer.count("lines", loaded)
        timer.log_summary()
        return {
            "loaded": loaded,
            "word_count": dictionary.word_count,
            "processing_time": timer.total_ms,
        }

    @application.post("/dictionary/words")
    def add_words(body: WordsRequest, request: Request):
        dictionary = request.app.state.dictionary
        added = dictionary.add_words(body.words)
        logger.info("Added %d words", added)
        return {"added": added, "word_count": dictionary.word_count}

    @application.post("/solve")
    def solve(body: SolveRequest, request: Request):
        from wordhunt.exceptions import BoardShapeError
        from wordhunt.metrics import StageTimer
        from wordhunt.solver import Solver, normalize_board

        timer = StageTimer("solve")

        with timer.stage("validate"):
            try:
                board = normalize_board(body.board)
            except BoardShapeError as e:
                raise HTTPException(400, str(e))
            rows = len(board)
            cols = len(board[0]) if board else 0
            if rows * cols > cfg.MAX_BOARD_CELLS:
                raise HTTPException(413, f"Board too large (max {cfg.MAX_BOARD_CELLS} cells)")

        board_str = " / ".join(" ".join(row) for row in board)
        logger.debug("Board %dx%d: %s", rows, cols, board_str)

        with timer.stage("snapshot"):
            solver = Solver(request.app.state.dictionary, cfg.MIN_WORD_LENGTH)

        with timer.stage("search"):
            paths = solver.find_word_paths(board)

        all_words = list(paths)
        words = all_words[:cfg.MAX_RESULTS] if cfg.MAX_RESULTS > 0 else all_words
        timer.count("cells", rows * cols)
        timer.count("words", len(all_words))
        timer.count("returned", len(words))
        timer.log_summary()

        return JSONResponse({
            "rows": rows,
            "cols": cols,
            "words": words,
            "word_count": len(words),
            "paths": {w: paths[w] for w in words},
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from wordhunt.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(cfg)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordhunt.settings import update_settings, get_editable_settings
        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Settings body must be a JSON object")
        errors = update_settings(cfg, **body)
        apply_log_level(cfg)
        if errors:
            return JSONResponse({"updated": get_editable_settings(cfg), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(cfg)})

    return application


app = create_app()


def main():
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
