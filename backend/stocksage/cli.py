"""StockSage command-line entry point.

Usage:
    stocksage serve [--host HOST] [--port PORT] [--reload]
    stocksage chat
    stocksage view <share-id-or-url>
"""

import argparse
import asyncio
import shutil
import subprocess
import sys
from pathlib import Path

import httpx
import uvicorn

from stocksage.core.config import settings
from stocksage.main import configure_logging
from stocksage.services.chat.client import ChatClient, View
from stocksage.services.chat.credentials import FileCredentialStore
from stocksage.services.chat.export import export_filename
from stocksage.services.chat.prompts import SUGGESTIONS
from stocksage.services.share.client import ShareClient
from stocksage.viewer import SharedConversationViewer, ViewStatus, share_id_from_url

_CLIPBOARD_COMMANDS = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["clip"],
]

HELP = """Commands:
  /export json|csv|txt [path]   save the conversation to a file
  /copy                         copy the conversation to the clipboard
  /share [title]                create a public share link
  /suggest N                    fill the input with starter prompt N
  /key                          forget the API key (clears the conversation)
  /quit                         exit"""


def copy_to_system_clipboard(text: str) -> None:
    for cmd in _CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]):
            subprocess.run(cmd, input=text, text=True, check=True, timeout=5)
            return
    raise RuntimeError("no clipboard utility found")


def _prompt_for_key(client: ChatClient) -> bool:
    """Ask until a key is saved. Returns False if the user gave up (EOF or Ctrl-C)."""
    print("📈 StockSage AI")
    print("Enter your Gemini API key (https://aistudio.google.com/apikey).")
    while client.view == View.CREDENTIAL_ENTRY:
        try:
            client.save_credential(input("API key: "))
        except ValueError as e:
            print(e)
        except (EOFError, KeyboardInterrupt):
            print()
            return False
    return True


def _export(client: ChatClient, args: list[str]) -> None:
    fmt = args[0] if args else "txt"
    exporters = {"json": client.export_json, "csv": client.export_csv, "txt": client.export_text}
    if fmt not in exporters:
        print("Format must be json, csv or txt")
        return
    content = exporters[fmt]()
    if content is None:
        print("Start a conversation to export")
        return
    path = Path(args[1]) if len(args) > 1 else Path(export_filename(fmt))
    path.write_text(content, encoding="utf-8")
    print(f"Saved {len(client.messages)} messages to {path}")


def _share(client: ChatClient, title: str | None) -> None:
    try:
        link = asyncio.run(client.share(ShareClient(settings.server_url), title=title))
    except httpx.HTTPError as e:
        print(f"❌ Failed to create share link: {e}")
        return
    if link is None:
        print("Start a conversation to share")
        return
    print(f"🔗 {link.share_url} (expires in {link.expires_in})")


def run_chat() -> int:
    client = ChatClient(FileCredentialStore(settings.credential_file))
    if client.view == View.CREDENTIAL_ENTRY and not _prompt_for_key(client):
        return 0

    print("Ask me about stocks, market trends, technical analysis, or investment strategies!")
    for i, (label, _) in enumerate(SUGGESTIONS, start=1):
        print(f"  /suggest {i}  {label}")
    print("Type /help for commands.")

    while True:
        try:
            line = input("> " if not client.input_text else f"> {client.input_text}\n> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line.startswith("/"):
            text = line or client.input_text
            reply = asyncio.run(client.submit(text))
            if reply is not None:
                print(f"\nSTOCKSAGE AI:\n{reply.content}\n")
            continue

        command, *args = line.split()
        if command == "/quit":
            return 0
        elif command == "/help":
            print(HELP)
        elif command == "/export":
            _export(client, args)
        elif command == "/copy":
            if not client.copy_to_clipboard(copy_to_system_clipboard, print) and not client.messages:
                print("Start a conversation to export")
        elif command == "/share":
            _share(client, " ".join(args) or None)
        elif command == "/suggest" and args and args[0].isdigit() and 1 <= int(args[0]) <= len(SUGGESTIONS):
            print(f"Input: {client.use_suggestion(int(args[0]) - 1)} (press Enter to send)")
        elif command == "/key":
            client.clear_credential()
            if not _prompt_for_key(client):
                return 0
        else:
            print(HELP)


def run_view(target: str) -> int:
    viewer = SharedConversationViewer(ShareClient(settings.server_url))
    state = asyncio.run(viewer.load(share_id_from_url(target)))
    print(viewer.render(), end="")
    return 0 if state.status == ViewStatus.SUCCESS else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="stocksage", description="StockSage AI stock market chat.")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the share API server")
    serve.add_argument("--host", default=settings.host, help=f"Host to bind (default: {settings.host})")
    serve.add_argument("--port", type=int, default=settings.port, help=f"Port to bind (default: {settings.port})")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    sub.add_parser("chat", help="Start an interactive chat session")

    view = sub.add_parser("view", help="Show a shared conversation")
    view.add_argument("target", help="Share id or share URL")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "serve":
        uvicorn.run("stocksage.main:app", host=args.host, port=args.port, reload=args.reload, log_level="info")
        return 0
    if args.command == "chat":
        return run_chat()
    return run_view(args.target)


if __name__ == "__main__":
    sys.exit(main())
