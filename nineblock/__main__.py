#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
nineblock CLI
Usage (examples):
  # 1) render an identicon to PNG
  python -m nineblock render 0x1234ABCD --size 64 --output icon.png

  # 2) render with a JSON config and a dark background
  python -m nineblock render 42 --config nineblock.json --background "#202020"

  # 3) show the decoded fields and colors
  python -m nineblock decode 0x1234ABCD
  python -m nineblock decode 0x1234ABCD --output decoded/1234abcd.json

  # 4) identity code for a piece of text (sha256, first 4 bytes)
  python -m nineblock code alice@example.com --salt s3cr3t
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional

from nineblock.core.codes import code_from_text, parse_code, to_code32
from nineblock.core.colors import complementary, fill_color, pick_colors
from nineblock.core.config import RendererConfig, load_config
from nineblock.core.decoder import decode
from nineblock.core.renderer import NineBlockRenderer
from nineblock.io.artifacts import atomic_write_json, save_image

logger = logging.getLogger("nineblock.cli")


def _print_err(msg: str) -> None:
    sys.stderr.write(msg.rstrip() + "\n")


def _config_from_args(args: argparse.Namespace) -> RendererConfig:
    cfg = load_config(args.config) if getattr(args, "config", None) else RendererConfig()
    overrides: Dict[str, Any] = {}
    if getattr(args, "cell_size", None) is not None:
        overrides["cell_size"] = args.cell_size
    if getattr(args, "background", None):
        overrides["background"] = args.background
    if getattr(args, "threshold", None) is not None:
        overrides["contrast_threshold"] = args.threshold
    if getattr(args, "resample", None):
        overrides["resample"] = args.resample
    return cfg.replace(**overrides) if overrides else cfg


# ──────────────────────────────────────────────────────────────────────────────
# Commands
# ──────────────────────────────────────────────────────────────────────────────

def cmd_render(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    code = parse_code(args.code)
    img = NineBlockRenderer(cfg).render(code, args.size)
    out = args.output or f"identicon_{to_code32(code):08x}_{args.size}.png"
    path = save_image(img, out)
    logger.info("wrote %s", path)
    print(str(path))
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    code = to_code32(parse_code(args.code))
    spec = decode(code)
    fill, stroke = pick_colors(spec.red, spec.green, spec.blue, cfg.background, cfg.contrast_threshold)
    payload = {
        "code": code,
        "hex": f"{code:#010x}",
        "spec": spec.to_dict(),
        "fill": list(fill),
        "complementary": list(complementary(fill_color(spec.red, spec.green, spec.blue))),
        "stroke": list(stroke) if stroke is not None else None,
        "background": list(cfg.background),
    }
    if args.output:
        path = atomic_write_json(args.output, payload)
        logger.info("wrote %s", path)
        print(str(path))
    else:
        print(json.dumps(payload, indent=2))
    return 0


def cmd_code(args: argparse.Namespace) -> int:
    code = code_from_text(args.text, args.salt or "")
    print(json.dumps({"code": code, "hex": f"{code:#010x}"}))
    return 0


# ──────────────────────────────────────────────────────────────────────────────
# Main parser
# ──────────────────────────────────────────────────────────────────────────────

def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="JSON config file (flat or {\"nineblock\": {...}})")
    p.add_argument("--cell-size", type=int, default=None, help="Pixels per patch before downscaling (default 20)")
    p.add_argument("--background", default=None, help="Background color, e.g. '#ffffff' or 'white'")
    p.add_argument("--threshold", type=float, default=None, help="Contrast guard distance (default 32.0)")
    p.add_argument("--resample", choices=["nearest", "bilinear", "bicubic", "lanczos"], default=None)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nineblock", description="Nine-block identicon renderer")
    p.add_argument("--log-level", default="WARNING", help="DEBUG|INFO|WARNING|ERROR")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Render an identity code to an image file")
    r.add_argument("code", help="Identity code: decimal, 0x-hex or negative")
    r.add_argument("--size", type=int, default=48, help="Output size in pixels (square)")
    r.add_argument("--output", "-o", default=None, help="Output path (format from suffix, default PNG)")
    _add_config_args(r)
    r.set_defaults(run=cmd_render)

    d = sub.add_parser("decode", help="Print decoded fields and colors as JSON")
    d.add_argument("code", help="Identity code: decimal, 0x-hex or negative")
    d.add_argument("--output", "-o", default=None, help="Write the JSON to this path instead of stdout")
    _add_config_args(d)
    d.set_defaults(run=cmd_decode)

    c = sub.add_parser("code", help="Identity code for a text value")
    c.add_argument("text")
    c.add_argument("--salt", default="", help="Salt prepended before hashing")
    c.set_defaults(run=cmd_code)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    run = getattr(args, "run", None)
    if not run:
        parser.print_help()
        return 2
    try:
        return int(run(args))
    except (ValueError, TypeError, OSError) as ex:
        logger.debug("command failed", exc_info=True)
        _print_err(f"nineblock {args.cmd}: {ex}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
