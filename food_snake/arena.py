"""
Arena runner - pit the food-seeking strategy against the others locally.

Usage:
    food-snake-arena                           # heuristic vs random, best-of-5
    food-snake-arena --games 20 --seed 42      # reproducible
    food-snake-arena --ffa                     # every strategy on one board
    food-snake-arena --width 7 --height 7 -v   # small board, turn-by-turn log
"""

import argparse
import logging
import random
import time

from food_snake import engine
from food_snake.selection import STRATEGIES
from food_snake.snake import make_decider

logger = logging.getLogger(__name__)

CHAMPION = "heuristic"


def summarize_match(champion: str, opponent: str, result: dict) -> tuple[int, int]:
    ours = result["wins"].get(champion, 0)
    theirs = result["wins"].get(opponent, 0)
    if ours > theirs:
        status = "WIN"
    elif ours < theirs:
        status = "LOSS"
    else:
        status = "DRAW"

    logger.info("vs %s: %s  %s %d - %d %s  (%d games)",
                opponent, status, champion, ours, theirs, opponent, result["total_games"])
    for i, game in enumerate(result["games"], 1):
        deaths = "".join(f" [{sid}: {reason}]" for sid, reason in game["death_reasons"].items())
        logger.info("  Game %d: winner=%-12s turns=%4d%s", i, game["winner"] or "draw", game["turns"], deaths)
    return ours, theirs


def run_ffa(strategies: dict, games: int, seed_base, verbose: bool, **kwargs) -> dict[str, int]:
    wins = {sid: 0 for sid in strategies}
    for i in range(games):
        seed = (seed_base + i) if seed_base is not None else None
        result = engine.run_game(strategies, seed=seed, verbose=verbose, **kwargs)
        if result["winner"]:
            wins[result["winner"]] += 1
        logger.info("Game %d: winner=%-12s turns=%4d", i + 1, result["winner"] or "none", result["turns"])
        for sid, reason in result["death_reasons"].items():
            logger.info("  %s: %s", sid, reason)

    ranked = sorted(wins.items(), key=lambda kv: -kv[1])
    for rank, (sid, w) in enumerate(ranked, 1):
        logger.info("%d. %-12s %2d wins (%5.1f%%)", rank, sid, w, w / max(games, 1) * 100)
    return wins


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Local Battlesnake arena")
    parser.add_argument("--games", type=int, default=5, help="Games per match (default: 5)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=11, help="Board width (default: 11)")
    parser.add_argument("--height", type=int, default=11, help="Board height (default: 11)")
    parser.add_argument("--max-turns", type=int, default=500, help="Turn limit (default: 500)")
    parser.add_argument("--opponent", type=str, default=None,
                        choices=sorted(s for s in STRATEGIES if s != CHAMPION),
                        help="Play a single opponent strategy")
    parser.add_argument("--verbose", "-v", action="store_true", help="Turn-by-turn output")
    parser.add_argument("--ffa", action="store_true", help="Free-for-all with every strategy")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.games < 1:
        parser.error("--games must be at least 1")
    if args.width < 3 or args.height < 3:
        parser.error("board must be at least 3x3")

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    if not args.verbose:
        logging.getLogger("food_snake.snake").setLevel(logging.WARNING)
    if args.seed is not None:
        # the random strategy draws from the module-level generator
        random.seed(args.seed)

    board_opts = {"width": args.width, "height": args.height, "max_turns": args.max_turns}

    if args.ffa:
        strategies = {name: make_decider(name) for name in STRATEGIES}
        run_ffa(strategies, args.games, args.seed, args.verbose, **board_opts)
        return

    opponents = [args.opponent] if args.opponent else [s for s in STRATEGIES if s != CHAMPION]
    total_ours = total_theirs = 0
    for opponent in opponents:
        strategies = {CHAMPION: make_decider(CHAMPION), opponent: make_decider(opponent)}
        started = time.time()
        result = engine.run_match(strategies, games=args.games, seed_base=args.seed,
                                  verbose=args.verbose, **board_opts)
        ours, theirs = summarize_match(CHAMPION, opponent, result)
        total_ours += ours
        total_theirs += theirs
        logger.info("  Time: %.1fs", time.time() - started)

    total = total_ours + total_theirs
    logger.info("%s wins: %d/%d (%.1f%%)", CHAMPION, total_ours, total, total_ours / max(total, 1) * 100)


if __name__ == "__main__":
    main()
