"""CLI entrypoints for rendering, serving, and inspecting initials avatars."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, replace
from pathlib import Path

from avatar_core import AvatarConfig, AvatarError, configure_logging, load_config, save_config
from avatar_core.config import config_path
from avatar_core.logging_setup import get_logger, log_event
from avatar_renderer import AvatarComposer

from .delivery import to_disk

log = get_logger("cli")

_OVERRIDES = {
    "font": "font_path",
    "font_size": "font_size",
    "width": "width",
    "height": "height",
    "dpi": "dpi",
    "spacer": "spacer",
    "x": "text_x",
    "y": "text_y",
}


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _config_from_args(args: argparse.Namespace) -> AvatarConfig:
    cfg = load_config(Path(args.config) if getattr(args, "config", None) else None)
    changes = {field: getattr(args, name) for name, field in _OVERRIDES.items() if getattr(args, name, None) is not None}
    return replace(cfg, **changes) if changes else cfg


def cmd_render(args: argparse.Namespace) -> int:
    composer = AvatarComposer()
    try:
        cfg = _config_from_args(args)
        out = to_disk(composer, args.text, args.out, cfg, font_color=args.fg, back_color=args.bg)
    except (AvatarError, OSError) as exc:
        log_event(log, "avatar_failed", f"render failed: {exc}", logging.ERROR, path=args.out)
        _print_json({"success": False, "error": type(exc).__name__, "detail": str(exc)})
        return 2

    _print_json(
        {
            "success": True,
            "initials": composer.initials(args.text),
            "path": str(out),
            "width": cfg.width,
            "height": cfg.height,
        }
    )
    return 0


def cmd_initials(args: argparse.Namespace) -> int:
    _print_json({"text": args.text, "initials": AvatarComposer().initials(args.text)})
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .server import create_app

    cfg = load_config(Path(args.config) if args.config else None)
    app = create_app(config=cfg, cache_size=args.cache_size)
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    path = Path(args.config) if args.config else config_path()
    _print_json({"path": str(path), "exists": path.exists(), "config": asdict(load_config(path))})
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = Path(args.config) if args.config else config_path()
    if path.exists() and not args.force:
        _print_json({"success": False, "path": str(path), "detail": "config exists, use --force to overwrite"})
        return 1
    saved = save_config(AvatarConfig(), path)
    _print_json({"success": True, "path": str(saved)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="initials-avatar", description="Initials placeholder avatar tools")
    parser.add_argument("--config", default=None, help="Optional path to a JSON settings file")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render an avatar PNG to disk")
    render_cmd.add_argument("text", help="Display name to derive initials from")
    render_cmd.add_argument("--out", required=True, help="Output PNG path")
    render_cmd.add_argument("--fg", default=None, help="Font color as RRGGBB or #RRGGBB")
    render_cmd.add_argument("--bg", default=None, help="Background color as RRGGBB or #RRGGBB")
    render_cmd.add_argument("--font", default=None, help="TrueType/OpenType font file")
    render_cmd.add_argument("--font-size", type=float, default=None)
    render_cmd.add_argument("--width", type=int, default=None)
    render_cmd.add_argument("--height", type=int, default=None)
    render_cmd.add_argument("--dpi", type=int, default=None)
    render_cmd.add_argument("--spacer", type=int, default=None)
    render_cmd.add_argument("--x", type=int, default=None, help="Horizontal shift after centering")
    render_cmd.add_argument("--y", type=int, default=None, help="Text baseline")
    render_cmd.set_defaults(func=cmd_render)

    initials_cmd = sub.add_parser("initials", help="Print the initials token for a name")
    initials_cmd.add_argument("text")
    initials_cmd.set_defaults(func=cmd_initials)

    serve_cmd = sub.add_parser("serve", help="Serve avatars over HTTP")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8080)
    serve_cmd.add_argument("--cache-size", type=int, default=None, help="Bound the avatar cache (LRU)")
    serve_cmd.set_defaults(func=cmd_serve)

    config_cmd = sub.add_parser("config", help="Inspect or create the settings file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective settings")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write default settings")
    init_cmd.add_argument("--force", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
