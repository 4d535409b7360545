"""FastAPI server exposing the rules engine, the AI opponent and game sessions."""

from __future__ import annotations

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from chesscore.config import EngineConfig
from chesscore.constants import PIECE_NONE, PROMOTION_KINDS, START_FEN, WHITE, make_piece
from chesscore.engine import ChessEngine
from chesscore.logs import setup_logging
from chesscore.search import Difficulty
from chesscore.session import AI_PLAYER, GameNotActiveError, GameSession, GameStore, IllegalMoveError

SQUARE_PATTERN = "^[a-h][1-8]$"
PROMOTION_PATTERN = "^[nbrqNBRQ]$"


class PositionRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    square: str | None = Field(default=None, pattern=SQUARE_PATTERN)


class MoveRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    from_square: str = Field(pattern=SQUARE_PATTERN)
    to_square: str = Field(pattern=SQUARE_PATTERN)
    promotion: str | None = Field(default=None, pattern=PROMOTION_PATTERN)


class EngineMoveRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    difficulty: Difficulty | None = None
    depth: int | None = Field(default=None, ge=1, le=5)


class CreateGameRequest(BaseModel):
    white_player: str = Field(min_length=1)
    black_player: str = Field(default=AI_PLAYER, min_length=1)
    fen: str = Field(default=START_FEN)
    ai_difficulty: Difficulty = Difficulty.MEDIUM


class GameMoveRequest(BaseModel):
    from_square: str = Field(pattern=SQUARE_PATTERN)
    to_square: str = Field(pattern=SQUARE_PATTERN)
    promotion: str | None = Field(default=None, pattern=PROMOTION_PATTERN)


class ResignRequest(BaseModel):
    player: str = Field(min_length=1)


router = APIRouter()


def _engine_from_fen(request: Request, fen: str) -> ChessEngine:
    try:
        return ChessEngine(fen, request.app.state.config.difficulty_depths)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _games(request: Request) -> GameStore:
    return request.app.state.games


def _game_or_404(request: Request, game_id: int) -> GameSession:
    try:
        return _games(request).get(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}") from exc


def _promotion_piece(letter: str | None) -> int:
    if letter is None:
        return PIECE_NONE
    return make_piece(PROMOTION_KINDS[letter.lower()], WHITE)


def _position_payload(engine: ChessEngine) -> dict:
    return {
        "fen": engine.export_fen(),
        "side_to_move": "w" if engine.position.side_to_move == WHITE else "b",
        "legal_moves": [move.uci() for move in engine.legal_moves()],
        "in_check": engine.is_check(),
        "status": engine.status().value,
    }


def _game_payload(game: GameSession) -> dict:
    engine = game.engine()
    return {
        "id": game.game_id,
        "white_player": game.white_player,
        "black_player": game.black_player,
        "ai_difficulty": game.ai_difficulty,
        "fen": game.fen,
        "turn": engine.turn,
        "status": game.status,
        "game_status": engine.status().value,
        "result": game.result.value if game.result else None,
        "winner": game.winner,
        "move_history": game.move_history,
        "moves": [
            {
                "notation": record.notation,
                "fen": record.fen,
                "piece": record.piece,
                "captured": record.captured,
                "promotion": record.promotion,
                "timestamp": record.timestamp.isoformat(),
            }
            for record in game.moves
        ],
    }


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/legal-moves")
def legal_moves(payload: PositionRequest, request: Request) -> dict:
    engine = _engine_from_fen(request, payload.fen)
    response = _position_payload(engine)
    if payload.square is not None:
        response["square"] = payload.square
        response["targets"] = engine.valid_moves(payload.square)
    return response


@router.post("/status")
def status(payload: PositionRequest, request: Request) -> dict:
    engine = _engine_from_fen(request, payload.fen)
    return {"fen": engine.export_fen(), "in_check": engine.is_check(), "status": engine.status().value}


@router.post("/move")
def move(payload: MoveRequest, request: Request) -> dict:
    engine = _engine_from_fen(request, payload.fen)
    played = engine.play(payload.from_square, payload.to_square, _promotion_piece(payload.promotion))
    if played is None:
        raise HTTPException(status_code=400, detail=f"Illegal move: {payload.from_square}{payload.to_square}")
    response = _position_payload(engine)
    response["last_move"] = played.notation
    return response


@router.post("/engine-move")
def engine_move(payload: EngineMoveRequest, request: Request) -> dict:
    engine = _engine_from_fen(request, payload.fen)
    config: EngineConfig = request.app.state.config

    depth = payload.depth
    if depth is None:
        difficulty = payload.difficulty.value if payload.difficulty else config.default_difficulty
        depth = engine.searcher.depth_for(difficulty)

    result = engine.searcher.search(engine.position, depth)
    best = None
    if result.best_move is not None:
        best = engine.play(result.best_move.from_square, result.best_move.to_square, result.best_move.promotion)

    response = _position_payload(engine)
    response.update(
        {
            "best_move": best.notation if best else None,
            "score": result.score,
            "depth": result.depth,
            "nodes": result.nodes,
            "cutoffs": result.cutoffs,
            "elapsed_ms": round(result.elapsed_ms, 2),
        }
    )
    return response


@router.post("/games", status_code=201)
def create_game(payload: CreateGameRequest, request: Request) -> dict:
    try:
        game = _games(request).create(
            white_player=payload.white_player,
            black_player=payload.black_player,
            fen=payload.fen,
            ai_difficulty=payload.ai_difficulty.value,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    with game.lock:
        if game.ai_to_move():
            game.play_ai()
        return _game_payload(game)


@router.get("/games/{game_id}")
def get_game(game_id: int, request: Request) -> dict:
    game = _game_or_404(request, game_id)
    with game.lock:
        return _game_payload(game)


@router.post("/games/{game_id}/move")
def game_move(game_id: int, payload: GameMoveRequest, request: Request) -> dict:
    game = _game_or_404(request, game_id)
    with game.lock:
        try:
            game.play(payload.from_square, payload.to_square, _promotion_piece(payload.promotion))
            if game.ai_to_move():
                game.play_ai()
        except IllegalMoveError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except GameNotActiveError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _game_payload(game)


@router.post("/games/{game_id}/resign")
def resign_game(game_id: int, payload: ResignRequest, request: Request) -> dict:
    game = _game_or_404(request, game_id)
    with game.lock:
        try:
            game.resign_player(payload.player)
        except GameNotActiveError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _game_payload(game)


def create_app(config: EngineConfig | None = None) -> FastAPI:
    config = config or EngineConfig()
    setup_logging(config.log_level, config.log_file)

    app = FastAPI(title="Chess Engine API", version="0.3.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = config
    app.state.games = GameStore(config.difficulty_depths)
    app.include_router(router)
    return app


app = create_app()
