#!/usr/bin/env python3
"""
CLI workflow runner for the outline-selection-export pipeline.

Provides command-line interface for browsing a PDF's outline and exporting
chapters or pages.
"""
import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from core.constants import AVAILABLE_MODELS
from data.database import session_scope, get_db_manager
from outline import count_nodes, iter_outline, max_depth
from serving.document_session import DocumentSession
from serving.settings_service import AssistantSettingsService
from utils.page_ranges import parse_page_spec


def open_session(file_path: str):
    """Open a PDF in a fresh session, or None if it cannot be read."""
    if not os.path.exists(file_path):
        print(f"❌ Error: File not found: {file_path}")
        return None

    with open(file_path, 'rb') as f:
        content = f.read()

    session = DocumentSession()
    try:
        session.load_document(content, os.path.basename(file_path))
    except Exception as e:
        print(f"❌ Error: Could not read PDF: {e}")
        return None
    return session


def show_outline_cli(file_path: str):
    """Print the resolved outline with page ranges."""
    session = open_session(file_path)
    if session is None:
        return

    print(f"\nDocument: {session.filename}")
    print(f"Pages: {session.total_pages}")
    print(f"Nodes: {count_nodes(session.outline)}  Depth: {max_depth(session.outline)}")
    print("-" * 60)

    for depth, node in iter_outline(session.outline):
        print("  " * depth + f"├─ {node.title}  [{node.start_page}-{node.end_page}]")


def locate_cli(file_path: str, page: int):
    """Show which outline nodes cover a page."""
    session = open_session(file_path)
    if session is None:
        return

    path = session.locate(page)
    if not path:
        print(f"No outline node covers page {page}")
        return

    for depth, node in enumerate(path):
        print("  " * depth + f"└─ {node.title}  [{node.start_page}-{node.end_page}]")


async def export_cli(
    file_path: str,
    chapters: list = None,
    pages: str = None,
    output: str = None
):
    """Export selected chapters and/or pages to a new PDF."""
    session = open_session(file_path)
    if session is None:
        return None

    for title in chapters or []:
        matches = [node for _, node in iter_outline(session.outline) if node.title == title]
        if not matches:
            print(f"⚠️  No outline node titled '{title}'")
            continue
        for node in matches:
            session.toggle_range(node.start_page, node.end_page, True)

    if pages:
        try:
            session.select_pages(parse_page_spec(pages, session.total_pages))
        except ValueError as e:
            print(f"❌ Error: {e}")
            return None

    if session.selection.is_empty():
        print("❌ Nothing selected. Use --chapter and/or --pages.")
        return None

    print(f"Selected {len(session.selection)} pages: {session.selection.sorted_pages()}")

    output_name = os.path.basename(output) if output else None
    result = await session.export(output_name)
    if not result.ok:
        print(f"❌ Error slicing PDF: {result.error}")
        return None

    output_dir = os.path.dirname(output) if output else os.path.dirname(os.path.abspath(file_path))
    output_path = os.path.join(output_dir, result.filename)
    with open(output_path, 'wb') as f:
        f.write(result.data)

    print(f"✓ Exported to: {output_path}")
    return output_path


def show_settings_cli():
    """Show saved assistant settings."""
    get_db_manager().create_tables()
    with session_scope() as session:
        saved = AssistantSettingsService(session).load()
        print(f"Model: {saved.model_id} ({AVAILABLE_MODELS.get(saved.model_id, 'unknown')})")
        print(f"API key: {'set' if saved.has_api_key else 'not set'}")


def save_settings_cli(model_id: str, api_key: str):
    """Save assistant settings."""
    get_db_manager().create_tables()
    with session_scope() as session:
        try:
            AssistantSettingsService(session).save(model_id, api_key)
        except ValueError as e:
            print(f"❌ Error: {e}")
            print(f"   Available models: {', '.join(AVAILABLE_MODELS)}")
            return
    print(f"✓ Settings saved (model: {model_id})")


def main():
    parser = argparse.ArgumentParser(
        description='Browse PDF outlines and export chapters or pages'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Outline command
    outline_parser = subparsers.add_parser('outline', help='Show resolved outline with page ranges')
    outline_parser.add_argument('file', type=str, help='PDF file')

    # Locate command
    locate_parser = subparsers.add_parser('locate', help='Show the outline nodes covering a page')
    locate_parser.add_argument('file', type=str, help='PDF file')
    locate_parser.add_argument('page', type=int, help='1-indexed page number')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export chapters and/or pages to a new PDF')
    export_parser.add_argument('file', type=str, help='PDF file')
    export_parser.add_argument('-c', '--chapter', action='append', default=[], help='Outline title to include (repeatable)')
    export_parser.add_argument('-p', '--pages', type=str, help='Pages to include, e.g. 1,2,5-8')
    export_parser.add_argument('-o', '--output', type=str, help='Output file path (default: suggested name next to the input)')

    # Settings commands
    settings_parser = subparsers.add_parser('settings', help='Show or save assistant settings')
    settings_parser.add_argument('--model', type=str, help='Model id to save')
    settings_parser.add_argument('--api-key', type=str, default='', help='API key to save')

    args = parser.parse_args()

    if args.command == 'outline':
        show_outline_cli(args.file)
    elif args.command == 'locate':
        locate_cli(args.file, args.page)
    elif args.command == 'export':
        asyncio.run(export_cli(
            file_path=args.file,
            chapters=args.chapter,
            pages=args.pages,
            output=args.output
        ))
    elif args.command == 'settings':
        if args.model:
            save_settings_cli(args.model, args.api_key)
        else:
            show_settings_cli()
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
