import os
import sys
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

# プロジェクトルートをパスに追加して nonogram をインポート可能にする
# このファイルは api_proto/local_api.py なので、親ディレクトリがルート
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from nonogram import solve
from nonogram.config import DEFAULT_ADVANCED_ONLY, DEFAULT_UNIQUE_ONLY, DEFAULT_USE_ADVANCED
from nonogram.logging_utils import get_logger

logger = get_logger()

app = FastAPI()


class SolveRequest(BaseModel):
    row_clues: list[str]
    col_clues: list[str]
    start: Optional[list[str]] = None  # "#", ".", "?" の行リスト
    use_advanced: bool = DEFAULT_USE_ADVANCED
    unique_only: bool = DEFAULT_UNIQUE_ONLY
    advanced_only: bool = DEFAULT_ADVANCED_ONLY


@app.get("/api/health")
async def api_health():
    return {"status": "ok"}


@app.post("/api/solve")
def api_solve(request: SolveRequest):
    """
    Solver API endpoint.
    Receives row/column clues (and an optional start grid) and calls the solver.
    """
    if not request.row_clues or not request.col_clues:
        raise HTTPException(status_code=400, detail="row_clues and col_clues must not be empty")

    try:
        return solve(
            request.row_clues,
            request.col_clues,
            start=request.start,
            use_advanced=request.use_advanced,
            unique_only=request.unique_only,
            advanced_only=request.advanced_only,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Solve failed")
        raise HTTPException(status_code=500, detail=str(e))
