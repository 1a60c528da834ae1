"""
Example: build a setlist from PDFs and step through it as one document.

Usage:
    python3 setlist_demo.py --create "Sunday" --add a.pdf b.pdf c.pdf
    python3 setlist_demo.py --list
    python3 setlist_demo.py --play 0
"""

import argparse
import logging
from pathlib import Path

from setlist_reader.setlists import (
    DocumentEntry,
    PyMuPdfViewer,
    SetlistManager,
    default_save_path,
)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", default=None, type=Path, help="Setlist save file (default: $SETLIST_FILE or ./setlists.dat)")
    parser.add_argument("--create", default=None, metavar="NAME", help="Create a setlist (empty name gets a default)")
    parser.add_argument("--add", nargs="*", default=[], type=Path, help="PDFs to add to the created setlist")
    parser.add_argument("--list", action="store_true", help="Print saved setlists")
    parser.add_argument("--play", default=None, type=int, metavar="INDEX", help="Step forward through a setlist")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    save_path = args.file or default_save_path()

    manager = SetlistManager()
    manager.load_from_file(save_path)

    if args.create is not None:
        index = manager.create_setlist(args.create)
        setlist = manager.get_setlist(index)
        for pdf in args.add:
            if not pdf.exists():
                raise FileNotFoundError(f"PDF not found: {pdf}")
            setlist.add_entry(DocumentEntry(filename=pdf.name, full_path=str(pdf.resolve())))
        if not manager.save_to_file(save_path):
            raise SystemExit(f"Could not save setlists to {save_path}")
        print(f"Created setlist {index} '{setlist.name}' with {setlist.item_count} items")

    if args.list:
        for idx, setlist in enumerate(manager.setlists):
            print(f"[{idx}] {setlist.name}")
            for item in setlist.items:
                print(f"      {item.name}  ({item.path})")

    if args.play is not None:
        viewer = PyMuPdfViewer()
        if not manager.activate_setlist(args.play, viewer):
            raise SystemExit(f"Could not activate setlist {args.play}")
        while True:
            item = manager.get_active_item()
            print(f"{item.name}: page {viewer.current_page() + 1}/{viewer.page_count()}")
            if not manager.next(viewer):
                break
        viewer.close()
        print("End of setlist")


if __name__ == "__main__":
    main()
