"""
Main entry point for the YouTube study notes application.
"""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from app.core.pipeline import generate_notes
from app.db.database import init_db
from app.models.schemas import VideoType
from app.utils.logger import logging


def save_notes(envelope: Dict[str, Any], output_file: str) -> Path:
    """Save the response envelope to a JSON file."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(envelope, f, indent=2, ensure_ascii=False)

    logging.info(f"Notes saved to: {output_file}")
    return output_file


def generate_study_notes(
    url: str,
    video_type: str = VideoType.GENERAL.value,
    transcript_file: Optional[str] = None,
    output_file: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Process a YouTube video: resolve its transcript and synthesize study notes.

    Args:
        url: YouTube video URL
        video_type: Note category
        transcript_file: Optional path to a transcript to use instead of fetching one
        output_file: Optional file path to save the envelope

    Returns:
        Success or error envelope
    """
    override = None
    if transcript_file:
        override = Path(transcript_file).read_text(encoding="utf-8")
        logging.info(f"Using transcript from {transcript_file} ({len(override)} chars)")

    init_db()
    envelope = generate_notes(url, video_type=video_type, transcript_override=override)

    if output_file:
        save_notes(envelope, output_file)

    return envelope


def print_notes(envelope: Dict[str, Any]):
    if not envelope.get("success"):
        print(f"Error [{envelope.get('errorCode', 'UNKNOWN')}]: {envelope.get('error')}")
        return

    notes = envelope["notes"]
    print("\n" + "=" * 80)
    print(f"{notes['title']} ({notes['duration']})")
    print("=" * 80)
    print(notes["summary"])
    print("\nKey points:")
    for point in notes["keyPoints"]:
        print(f"  - {point}")
    for section in notes["sections"]:
        stamp = f"[{section['timestamp']}] " if section.get("timestamp") else ""
        print(f"\n{stamp}{section['title']}")
        print(section["content"])
    print("=" * 80)


def main():
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="YouTube Study Notes")
    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--type", dest="video_type", default=VideoType.GENERAL.value,
                        choices=[t.value for t in VideoType], help="Kind of video")
    parser.add_argument("--transcript-file", help="Use this transcript instead of fetching captions")
    parser.add_argument("--output", help="Output file path for the notes JSON")

    args = parser.parse_args()

    # Load environment variables
    load_dotenv()

    envelope = generate_study_notes(args.url, args.video_type, args.transcript_file, args.output)
    print_notes(envelope)
    return 0 if envelope.get("success") else 1


if __name__ == "__main__":
    raise SystemExit(main())
