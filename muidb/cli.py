#!/usr/bin/env python3
"""
muidb - translation database command line tool

Keeps the translations of a project in one database file, merges RESX and
XLIFF files into it, and writes per-language RESX files from it.

Commands:
    info            - Show item, language and state counts
    import-file     - Merge a RESX or XLIFF file into the database
    export          - Write all configured output files
    export-file     - Write one language into a single file
    add-output-file - Configure an output file
    verify          - Check the database and save it normalized
    formats         - List supported formats
    about           - Show license and third-party information

Example Workflow:
    1. muidb import-file strings.muidb --type resx --in Strings.resx --lang en
    2. muidb import-file strings.muidb --type xliff --in Strings.de.xlf --lang de
    3. muidb add-output-file strings.muidb --name Strings.de.resx --lang de
    4. muidb verify strings.muidb
    5. muidb export strings.muidb --verbose
"""

import argparse
import json
import sys
import traceback
from typing import Optional

from . import __version__
from .config import load_config
from .database import Database
from .format_handlers import FileFormat, list_formats
from .logger import get_logger, set_log_level
from .states import TranslationState
from .summary import summarize
from .transfer import ExportOptions, export_all, export_file, import_file
from .verify import verify

logger = get_logger(__name__)

PROG = "muidb"


def cmd_info(args) -> dict:
    """Summarize the database."""
    db = Database.open(args.muidb)
    summary = summarize(db)
    result = {"status": "ok"}
    result.update(summary.to_dict())
    return result


def cmd_import_file(args) -> dict:
    """Merge a resource file into the database and save it."""
    # Resolve the format before the database is created or the file read
    file_format = FileFormat.from_tag(args.type)

    db = Database.open(args.muidb, create_if_missing=True)
    result = import_file(db, args.input, file_format, args.lang, config=args.config_values)
    db.save()

    return {
        "status": "ok",
        "format": file_format.value,
        "lang": args.lang,
        **result.to_dict(),
        "summary": f"added items: {len(result.added)}\nupdated items: {len(result.updated)}",
    }


def cmd_export(args) -> dict:
    """Write every configured output file."""
    db = Database.open(args.muidb)
    options = ExportOptions.INCLUDE_COMMENTS if args.config_values.include_comments else ExportOptions.NONE

    exported = []

    def on_export(spec, path):
        exported.append({"lang": spec.lang, "format": spec.format, "path": str(path)})
        if args.verbose and not args.json:
            print(f"exporting language '{spec.lang}' into file '{path}'")

    export_all(db, options=options, progress=on_export)

    return {
        "status": "ok",
        "files": exported,
        "summary": f"exported files: {len(exported)}",
    }


def cmd_export_file(args) -> dict:
    """Write one language into a single file."""
    file_format = FileFormat.from_tag(args.type)
    options = ExportOptions.NONE if args.no_comments else ExportOptions.INCLUDE_COMMENTS

    db = Database.open(args.muidb)
    count = export_file(db, args.out, args.lang, file_format, options)

    return {
        "status": "ok",
        "path": args.out,
        "lang": args.lang,
        "records": count,
        "summary": f"exporting language '{args.lang}' into file '{args.out}'",
    }


def cmd_add_output_file(args) -> dict:
    """Configure an output file and save."""
    file_format = FileFormat.from_tag(args.type)

    db = Database.open(args.muidb, create_if_missing=True)
    spec = db.add_output_file(args.name, args.lang, file_format.value)
    db.save()

    return {
        "status": "ok",
        "file": {"name": spec.name, "lang": spec.lang, "format": spec.format},
        "summary": f"configured output file '{spec.name}' (lang={spec.lang})",
    }


def cmd_verify(args) -> dict:
    """Verify the database and save the normalized result."""
    db = Database.open(args.muidb)
    report = verify(db)
    db.save()

    result = {"status": "ok"}
    result.update(report.to_dict())
    result["summary"] = f"{len(report.issues)} issue(s) found"
    return result


def cmd_formats(args) -> dict:
    """List supported formats."""
    formats = list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "summary": f"{len(formats)} formats supported: {', '.join(f['name'] for f in formats)}",
    }


def cmd_about(args) -> dict:
    return {"status": "ok", "about": ABOUT_TEXT.format(prog=PROG, version=__version__)}


# Text output

def print_info(result: dict) -> None:
    for entry in result["unknown_states"]:
        print(
            f"unknown state '{entry['state']}' for item id={entry['id']} and lang={entry['lang']}",
            file=sys.stderr,
        )

    states = result["states"]
    print(f"  items total : {result['items']}")
    print(f"  languages   : {len(result['languages'])}")
    for state in TranslationState:
        print(f"  # {state.value:<10}: {states[state.value]}")
    print(f"  # {'unknown':<10}: {result['unknown']}")
    print(f"  # {'comments':<10}: {result['comments']}")

    print("Configured output files:")
    for f in result["output_files"]:
        print(f" - {f['name']} (lang={f['lang']})")


def print_import(result: dict, verbose: bool) -> None:
    if verbose:
        for item_id in result["added_items"]:
            print(f"added resource '{item_id}'")
        for item_id in result["updated_items"]:
            print(f"updated resource '{item_id}'")
    print(result["summary"])


def print_verify(result: dict) -> None:
    for issue in result["issues"]:
        print(f"warning: {issue['message']}", file=sys.stderr)
    if result["reordered"]:
        print("items reordered by id")
    print(result["summary"])


def print_formats(result: dict) -> None:
    for f in result["formats"]:
        modes = "import/export" if f["export"] else "import only"
        print(f"  {f['name']:<6} .{', .'.join(f['extensions'])} ({modes})")


def print_text(command: str, result: dict, args) -> None:
    if command == "info":
        print_info(result)
    elif command == "import-file":
        print_import(result, args.verbose)
    elif command == "export-file":
        if args.verbose:
            print(result["summary"])
    elif command == "export":
        if args.verbose:
            print(result["summary"])
    elif command == "verify":
        print_verify(result)
    elif command == "formats":
        print_formats(result)
    elif command == "about":
        print(result["about"])
    else:
        print(result["summary"])


def print_error(e: BaseException, args) -> None:
    if getattr(args, "json", False):
        error = {
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }
        details = getattr(e, "details", None)
        if details:
            error["details"] = details
        if e.__cause__ is not None:
            error["cause"] = str(e.__cause__)
        print(json.dumps(error, ensure_ascii=False), file=sys.stderr)
    else:
        print(f"error: {e}", file=sys.stderr)
        if e.__cause__ is not None:
            print(f"additional error information: {e.__cause__}", file=sys.stderr)

    if getattr(args, "debug", False):
        traceback.print_exc()


class ArgumentParser(argparse.ArgumentParser):
    """Exit with status 1 on argument errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


COMMANDS = {
    "info": cmd_info,
    "import-file": cmd_import_file,
    "export": cmd_export,
    "export-file": cmd_export_file,
    "add-output-file": cmd_add_output_file,
    "verify": cmd_verify,
    "formats": cmd_formats,
    "about": cmd_about,
}


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROG,
        description="muidb - translation database tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported Formats:
  resx     - .NET resource files (import and export)
  xliff    - XLIFF 1.2 files (import only)

Examples:
  # Merge the neutral resources (database is created if missing)
  muidb import-file app.muidb --type resx --in Strings.resx --lang en

  # Merge a translated XLIFF file
  muidb import-file app.muidb --type xliff --in Strings.de.xlf --lang de --verbose

  # Write German without comments
  muidb export-file app.muidb --type resx --out Strings.de.resx --lang de --no-comments

  # Check and save
  muidb verify app.muidb
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--config", help="Config file (default: $MUIDB_CONFIG or ./muidb.yaml)")
    parser.add_argument("--debug", action="store_true", help="Debug logging and tracebacks")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info command
    info_parser = subparsers.add_parser("info", help="Show item, language and state counts")
    info_parser.add_argument("muidb", help="Database file")

    # import-file command
    import_parser = subparsers.add_parser("import-file", help="Merge a resource file into the database")
    import_parser.add_argument("muidb", help="Database file (created if missing)")
    import_parser.add_argument("--type", "-t", required=True, help="Input format (resx or xliff)")
    import_parser.add_argument("--in", "-i", dest="input", required=True, help="Input file")
    import_parser.add_argument("--lang", "-l", required=True, help="Language of the input file")
    import_parser.add_argument("--verbose", "-v", action="store_true", help="List added and updated items")

    # export command
    export_parser = subparsers.add_parser("export", help="Write all configured output files")
    export_parser.add_argument("muidb", help="Database file")
    export_parser.add_argument("--verbose", "-v", action="store_true", help="List written files")

    # export-file command
    export_file_parser = subparsers.add_parser("export-file", help="Write one language into a file")
    export_file_parser.add_argument("muidb", help="Database file")
    export_file_parser.add_argument("--type", "-t", required=True, help="Output format (resx)")
    export_file_parser.add_argument("--out", "-o", required=True, help="Output file")
    export_file_parser.add_argument("--lang", "-l", required=True, help="Language to export")
    export_file_parser.add_argument("--no-comments", action="store_true", help="Leave comments out")
    export_file_parser.add_argument("--verbose", "-v", action="store_true", help="Print the written file")

    # add-output-file command
    add_output_parser = subparsers.add_parser("add-output-file", help="Configure an output file")
    add_output_parser.add_argument("muidb", help="Database file (created if missing)")
    add_output_parser.add_argument("--name", "-n", required=True, help="File name, relative to the database")
    add_output_parser.add_argument("--lang", "-l", required=True, help="Language written to the file")
    add_output_parser.add_argument("--type", "-t", default="resx", help="Output format (default: resx)")

    # verify command
    verify_parser = subparsers.add_parser("verify", help="Check the database and save it normalized")
    verify_parser.add_argument("muidb", help="Database file")

    # formats command
    subparsers.add_parser("formats", help="List supported formats")

    # about command
    subparsers.add_parser("about", help="Show license and third-party information")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        args.config_values = load_config(args.config)
        set_log_level("debug" if args.debug else args.config_values.log_level)
        logger.debug("running command '%s'", args.command)

        result = COMMANDS[args.command](args)

        if args.json:
            print(json.dumps(result, indent=2, ensure_ascii=False))
        else:
            print_text(args.command, result, args)
    except Exception as e:
        print_error(e, args)
        return 1

    return 0


ABOUT_TEXT = """
{prog} {version} uses the following open source 3rdParty libs:

- PyYAML: https://github.com/yaml/pyyaml (MIT)

For additional license information please consult the LICENSE file in the respective repository.

License:
Copyright (c) the muidb authors
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

* Redistributions of source code must retain the above copyright notice, this
  list of conditions and the following disclaimer.

* Redistributions in binary form must reproduce the above copyright notice,
  this list of conditions and the following disclaimer in the documentation
  and / or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""


if __name__ == "__main__":
    sys.exit(main())
