#!/usr/bin/env python
import os, argparse, json, logging
from dataclasses import replace
from mockinvi.config import EvaluatorConfig
from mockinvi.resume import read_file, resume_context
from mockinvi.runner import run_full_pass

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="Path to session JSON with a top-level 'questions' list")
    ap.add_argument("--out", help="Output path (defaults to <input>_scored.json)")
    ap.add_argument("--resume", help="Optional .txt or .pdf resume used as evaluation context")
    ap.add_argument("--mock", action="store_true", help="Enable MOCK_MODE=1 (no API calls)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    config = EvaluatorConfig.from_env()
    if args.mock:
        config = replace(config, mock_mode=True)
    context = resume_context(read_file(args.resume)) if args.resume else None

    out = args.out or (os.path.splitext(args.input)[0] + "_scored.json")
    result = run_full_pass(args.input, out, config, context=context)
    print(json.dumps({
        "saved": out,
        "graded": result["meta"]["graded_questions"],
        "source": result["meta"]["source"],
        "grade": result["overall"]["grade"],
    }, indent=2))

if __name__ == "__main__":
    main()
