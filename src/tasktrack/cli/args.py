# src/tasktrack/cli/args.py

"""Raw argv tokenizer: positionals plus --options."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.command_models import ParsedArgs


def parse_args(argv: Sequence[str]) -> ParsedArgs:
    """
    Tokenize argv.

    --key=value  -> options[key] = "value"
    --key value  -> options[key] = "value" (next token consumed unless it starts with "-")
    --flag       -> options[flag] = True
    anything else is a positional.
    """
    parsed = ParsedArgs()
    i = 0
    n = len(argv)

    while i < n:
        arg = argv[i]

        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            parsed.options[key] = value
            i += 1
            continue

        if arg.startswith("--"):
            key = arg[2:]
            nxt = argv[i + 1] if i + 1 < n else None
            if nxt and not nxt.startswith("-"):
                parsed.options[key] = nxt
                i += 2
            else:
                parsed.options[key] = True
                i += 1
            continue

        parsed.positionals.append(arg)
        i += 1

    return parsed
