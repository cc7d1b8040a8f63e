"""Tests for snake_arena.engine.pipeline module, driven through GameEngine."""

from __future__ import annotations

from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import Food, FoodKind, Snake
from snake_arena.domain.events import FoodEaten, GameOver, LevelCompleted, SnakeDied
from snake_arena.domain.formulas import cumulative_target_score
from snake_arena.domain.geometry import Direction, Position
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.engine.game import GameEngine
from snake_arena.engine.level import LAST_SURVIVOR, SNAKE_DIED, TARGET_REACHED, TIME_EXPIRED
from snake_arena.engine.pipeline import ATE_ITSELF, COLLIDED_WITH_SNAKE, CRASHED_INTO_WALL


def _engine(**settings: object) -> GameEngine:
    base: dict[str, object] = {"auto_replenish_food": False}
    base.update(settings)
    return GameEngine(EngineContext.seeded(1, GameSettings(**base)))  # type: ignore[arg-type]


def _row_snake(snake_id: int = 0, head: Position = Position(3, 5), length: int = 3) -> Snake:
    return Snake(
        snake_id,
        f"s{snake_id}",
        [Position(head.x - i, head.y) for i in range(length)],
        Direction.RIGHT,
    )


class TestEating:
    def test_young_apple(self) -> None:
        snake = _row_snake()
        apple = Food(FoodKind.APPLE, Position(4, 5))
        state = GameState(width=10, height=10, snakes=[snake], foods=[apple])
        snake.ticks_without_food = 7
        result = _engine().process_tick(state)
        assert snake.head == Position(4, 5)
        assert len(snake) == 4
        assert snake.score == 1
        assert snake.ticks_without_food == 0
        assert state.foods == []
        assert result.of_type(FoodEaten) == [FoodEaten(0, Position(4, 5), 1)]

    def test_rabbit_scenario(self) -> None:
        engine = _engine(rabbit_from_level=1)
        snake = _row_snake()
        rabbit = Food(FoodKind.RABBIT, Position(4, 5), age=10, clock=10)
        state = GameState(width=10, height=10, snakes=[snake], foods=[rabbit])
        engine.process_tick(state)
        assert snake.score == 1
        assert len(snake) == 4
        assert snake.head == Position(4, 5)
        assert state.foods == []
        assert not state.level_complete

    def test_adult_apple_pays_extra(self) -> None:
        snake = _row_snake()
        apple = Food(FoodKind.APPLE, Position(4, 5), age=5, clock=5)
        state = GameState(width=10, height=10, snakes=[snake], foods=[apple])
        _engine(adult_apple_points=2, adult_apple_growth=2).process_tick(state)
        assert snake.score == 2
        assert len(snake) == 5

    def test_unfed_snake_gets_hungrier(self) -> None:
        snake = _row_snake()
        state = GameState(width=10, height=10, snakes=[snake])
        _engine().process_tick(state)
        assert snake.ticks_without_food == 1
        assert len(snake) == 3


class TestDeaths:
    def test_wall_crash_ends_single_snake_game(self) -> None:
        snake = Snake(0, "s", [Position(9, 5), Position(8, 5)], Direction.RIGHT)
        state = GameState(width=10, height=10, snakes=[snake])
        result = _engine().process_tick(state)
        assert not snake.alive
        assert snake.death_reason == CRASHED_INTO_WALL
        assert state.game_over and state.level_complete
        tail = [e for e in result.events if isinstance(e, (GameOver, LevelCompleted))]
        assert tail == [GameOver(), LevelCompleted(SNAKE_DIED)]

    def test_wall_cell(self) -> None:
        snake = _row_snake()
        state = GameState(width=10, height=10, snakes=[snake], walls=[Position(4, 5)])
        _engine().process_tick(state)
        assert snake.death_reason == CRASHED_INTO_WALL
        assert snake.head == Position(3, 5)

    def test_snake_collision(self) -> None:
        mover = _row_snake(0, head=Position(2, 5))
        column = [Position(3, 3), Position(3, 4), Position(3, 5), Position(3, 6)]
        blocker = Snake(1, "b", column, Direction.UP)
        state = GameState(width=10, height=10, level_time_left=60, snakes=[mover, blocker])
        result = _engine().process_tick(state)
        assert not mover.alive
        assert mover.death_reason == COLLIDED_WITH_SNAKE
        assert blocker.alive and blocker.head == Position(3, 2)
        assert result.of_type(SnakeDied) == [SnakeDied(0, COLLIDED_WITH_SNAKE)]
        assert state.level_complete and not state.game_over
        assert result.of_type(LevelCompleted) == [LevelCompleted(LAST_SURVIVOR, 1)]
        assert blocker.levels_won == 1

    def test_later_mover_sees_earlier_moves(self) -> None:
        first = Snake(0, "a", [Position(4, 4), Position(4, 3)], Direction.DOWN)
        second = Snake(1, "b", [Position(3, 5), Position(2, 5)], Direction.RIGHT)
        third = Snake(2, "c", [Position(8, 8), Position(8, 9)], Direction.UP)
        state = GameState(width=10, height=10, level_time_left=60, snakes=[first, second, third])
        _engine().process_tick(state)
        assert first.alive and first.head == Position(4, 5)
        assert not second.alive
        assert second.death_reason == COLLIDED_WITH_SNAKE

    def test_ate_itself(self) -> None:
        snake = Snake(
            0,
            "s",
            [Position(2, 2), Position(3, 2), Position(3, 3), Position(2, 3), Position(1, 3)],
            Direction.DOWN,
        )
        state = GameState(width=10, height=10, snakes=[snake])
        _engine().process_tick(state)
        assert snake.death_reason == ATE_ITSELF

    def test_chasing_own_tail_is_safe(self) -> None:
        snake = Snake(
            0,
            "s",
            [Position(1, 1), Position(2, 1), Position(2, 2), Position(1, 2)],
            Direction.DOWN,
        )
        state = GameState(width=10, height=10, snakes=[snake])
        _engine().process_tick(state)
        assert snake.alive
        assert snake.head == Position(1, 2)

    def test_dead_snakes_do_not_move(self) -> None:
        dead = _row_snake(0)
        dead.die("x")
        alive = _row_snake(1, head=Position(3, 8))
        state = GameState(width=10, height=10, level_time_left=60, snakes=[dead, alive])
        _engine().process_tick(state)
        assert dead.head == Position(3, 5)


class TestLevelCompletion:
    def test_single_snake_reaches_target(self) -> None:
        engine = _engine(target_score_coeff=0.0, target_score_base=1.0)
        snake = _row_snake()
        apple = Food(FoodKind.APPLE, Position(4, 5))
        state = GameState(width=10, height=10, snakes=[snake], foods=[apple])
        result = engine.process_tick(state)
        assert state.level_complete
        assert not state.game_over
        assert result.of_type(LevelCompleted) == [LevelCompleted(TARGET_REACHED)]

    def test_forced_score_completes_level(self) -> None:
        engine = _engine()
        snake = _row_snake()
        snake.score = cumulative_target_score(1, GameSettings())
        state = GameState(width=10, height=10, snakes=[snake])
        result = engine.process_tick(state)
        assert state.level_complete
        assert result.of_type(LevelCompleted) == [LevelCompleted(TARGET_REACHED)]

    def test_time_expired_is_a_draw(self) -> None:
        snakes = [_row_snake(0, head=Position(3, 2)), _row_snake(1, head=Position(3, 7))]
        state = GameState(width=10, height=10, level_time_left=0, snakes=snakes)
        result = _engine().process_tick(state)
        assert result.of_type(LevelCompleted) == [LevelCompleted(TIME_EXPIRED, None)]
        assert all(s.levels_won == 0 for s in snakes)

    def test_terminal_state_is_frozen(self) -> None:
        snake = _row_snake()
        state = GameState(width=10, height=10, snakes=[snake], level_complete=True)
        result = _engine().process_tick(state)
        assert result.events == ()
        assert state.tick_count == 0
        assert snake.head == Position(3, 5)

    def test_board_rebuilt_after_tick(self) -> None:
        snake = _row_snake()
        state = GameState(width=10, height=10, snakes=[snake])
        _engine().process_tick(state)
        assert state.board[5][4].value == "#"
        assert state.board[5][1].value == " "
