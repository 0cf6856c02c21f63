import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from s3batch import __version__
from s3batch.commands import COMMANDS
from s3batch.config_loader import load_config, logs_dir
from s3batch.errors import RequestFailure, S3BatchError, ServiceError, cleanup
from s3batch.log_utils import setup_logger
from s3batch.options import Option, options_help
from s3batch.params import ParamShape
from s3batch.retry import RetryPolicy
from s3batch.schemas import Resolution

_CLI_LOGGER: Optional[logging.Logger] = None


def _get_cli_logger(cfg: Dict[str, Any]) -> logging.Logger:
    global _CLI_LOGGER
    if _CLI_LOGGER:
        return _CLI_LOGGER
    _CLI_LOGGER = setup_logger(logs_dir(cfg) / "s3batch.log", name="s3batch", level=cfg.get("log_level") or "INFO")
    return _CLI_LOGGER


def parse_arg_shapes(text: str) -> frozenset:
    return frozenset(ParamShape.parse(part) for part in text.split(",") if part.strip())


def cmd_commands(cfg, args) -> int:
    print("Commands:")
    print(COMMANDS.render_help(), end="")
    print()
    print("Options:")
    print(options_help(), end="")
    return 0


def cmd_options(cfg, args) -> int:
    print(options_help(), end="")
    return 0


def _print_resolution(res: Resolution) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=res.description, show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    for k, v in res.summary().items():
        if isinstance(v, list):
            v = " ".join(v)
        table.add_row(k, str(v))
    Console().print(table)


def cmd_resolve(cfg, args) -> int:
    shapes = [parse_arg_shapes(a) for a in args.arg]
    res = COMMANDS.resolve(args.keyword, shapes, args.options or [])
    if args.json:
        print(json.dumps(res.summary(), ensure_ascii=False, indent=2))
    else:
        _print_resolution(res)
    return 0


def cmd_classify(cfg, args) -> int:
    if args.status is not None:
        err = RequestFailure(args.code, args.message, status_code=args.status)
    else:
        err = ServiceError(args.code, args.message)
    decision = RetryPolicy.from_config(cfg).decide(err, args.attempt, label="classify")
    payload = {
        "code": decision.code,
        "retry": decision.retry,
        "delay_s": decision.delay_s,
        "message": decision.message,
    }
    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0
    from rich.console import Console
    from rich.table import Table

    table = Table(title="retry" if decision.retry else "no retry", show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    for k, v in payload.items():
        table.add_row(k, str(v))
    Console().print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="s3batch command grammar")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    sub = parser.add_subparsers(dest="command", required=False)

    p_cmds = sub.add_parser("commands", help="List accepted commands and options")
    p_cmds.set_defaults(func=cmd_commands)

    p_opts = sub.add_parser("options", help="List command options")
    p_opts.set_defaults(func=cmd_options)

    # -h is an option flag here, so help moves to --help only
    p_res = sub.add_parser("resolve", help="Resolve a command against the command table", add_help=False)
    p_res.add_argument("--help", action="help", help="Show this help message and exit")
    p_res.add_argument("keyword", help="Command keyword (cp, mv, rm, ls, du, ...)")
    p_res.add_argument(
        "--arg",
        action="append",
        default=[],
        help="Comma-separated candidate shapes of one argument (e.g. file_obj,glob); repeat per argument",
    )
    for o in Option:
        if not o.flag:
            continue
        p_res.add_argument(o.flag, action="append_const", const=o, dest="options", help=o.help_text)
    p_res.add_argument("--json", action="store_true", help="Emit JSON output")
    p_res.set_defaults(func=cmd_resolve)

    p_cls = sub.add_parser("classify", help="Show the retry verdict for a remote-store error code")
    p_cls.add_argument("code", help="Service error code (SlowDown, InternalError, ...)")
    p_cls.add_argument("--message", default="", help="Error message")
    p_cls.add_argument("--status", type=int, default=None, help="HTTP status code of the failed request")
    p_cls.add_argument("--attempt", type=int, default=1, help="Failures of the call so far, starting at 1")
    p_cls.add_argument("--json", action="store_true", help="Emit JSON output")
    p_cls.set_defaults(func=cmd_classify)

    return parser


def main(argv: List[str] = None) -> int:
    cfg = load_config()
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if "--version" in argv:
        print(__version__)
        return 0
    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        return cmd_commands(cfg, args)
    logger = _get_cli_logger(cfg)
    try:
        logger.info("cli_command %s", args.command)
        return args.func(cfg, args)
    except S3BatchError as e:
        logger.warning("cli_error %s: %s", args.command, e)
        print(f"error: {cleanup(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
