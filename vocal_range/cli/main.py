"""Main entry point for the Vocal Range CLI."""

import argparse
import sys
import threading
from typing import List, Optional

from ..logger import get_logger
from ..logging_config import setup_logging
from ..core.config import ConfigManager
from ..core.factory import ComponentFactory
from ..note_types import VocalRangeResult
from ..note_utils import frequency_to_note
from ..root_note import calculate_optimal_root_note, root_note_for_range

logger = get_logger(__name__)


def print_result(result: VocalRangeResult) -> None:
    """Print a range result with its suggested root note."""
    root = root_note_for_range(result)
    print(
        f"Range: {result.lowest_note.name} ({result.lowest_frequency:.1f} Hz) - "
        f"{result.highest_note.name} ({result.highest_frequency:.1f} Hz)"
    )
    print(f"Span: {result.range_semitones} semitones")
    print(f"Voice type: {result.voice_type}")
    print(f"Root note: {root.name}")


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(description="Vocal Range - singing range analysis")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config-dir", default=None, help="Directory holding JSON configuration files"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a recorded audio file")
    analyze_parser.add_argument("file", help="Audio file to analyze (e.g. WAV)")
    analyze_parser.add_argument(
        "--chunk-size", type=int, default=None, help="Samples per analysis frame"
    )
    analyze_parser.add_argument(
        "--min-interval",
        type=float,
        default=None,
        help="Minimum seconds between analysed frames",
    )

    live_parser = subparsers.add_parser("live", help="Track the range from a microphone")
    live_parser.add_argument(
        "--device", type=int, default=None, help="Audio input device ID"
    )
    live_parser.add_argument(
        "--duration", type=float, default=30.0, help="Session duration in seconds"
    )
    live_parser.add_argument(
        "--min-interval",
        type=float,
        default=None,
        help="Minimum seconds between analysed frames",
    )

    note_parser = subparsers.add_parser("note", help="Name the note nearest a frequency")
    note_parser.add_argument("frequency", type=float, help="Frequency in Hz")

    root_parser = subparsers.add_parser("root-note", help="Suggest a root note for a range")
    root_parser.add_argument("low", type=float, help="Lowest frequency in Hz")
    root_parser.add_argument("high", type=float, help="Highest frequency in Hz")

    parsed_args = parser.parse_args(args)

    setup_logging(level="DEBUG" if parsed_args.debug else "WARNING")

    if parsed_args.command == "note":
        note = frequency_to_note(parsed_args.frequency)
        print(f"{note.name} ({note.cents:+d} cents)")
        return 0

    if parsed_args.command == "root-note":
        if parsed_args.low > parsed_args.high:
            print("low must not exceed high", file=sys.stderr)
            return 2
        print(calculate_optimal_root_note(parsed_args.low, parsed_args.high).name)
        return 0

    if parsed_args.command not in ("analyze", "live"):
        parser.print_help()
        return 1

    factory = ComponentFactory(ConfigManager(parsed_args.config_dir))

    try:
        if parsed_args.command == "analyze":
            provider_kwargs = {"file_path": parsed_args.file}
            if parsed_args.chunk_size is not None:
                provider_kwargs["chunk_size"] = parsed_args.chunk_size
            provider = factory.create_audio_provider("file", **provider_kwargs)
        else:
            provider = factory.create_audio_provider("live", device_id=parsed_args.device)
    except (OSError, RuntimeError, ValueError) as e:
        logger.error(f"Could not open audio source: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session_kwargs = {}
    if parsed_args.min_interval is not None:
        session_kwargs["min_interval"] = parsed_args.min_interval
    session = factory.create_session(provider, **session_kwargs)
    session.events.on_progress(
        lambda progress: logger.debug(
            f"Progress: {progress.min_frequency:.1f}-{progress.max_frequency:.1f}Hz "
            f"({progress.readings} readings)"
        )
    )

    timer = None
    if parsed_args.command == "live":
        # The session has no time limit of its own
        timer = threading.Timer(parsed_args.duration, provider.stop)
        timer.start()
        print(f"Sing from your lowest to your highest note ({parsed_args.duration:.0f}s)...")

    try:
        result = session.run()
    except KeyboardInterrupt:
        session.stop()
        result = session.tracker.last_result
        if result is None:
            return 130
    finally:
        if timer is not None:
            timer.cancel()

    print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
