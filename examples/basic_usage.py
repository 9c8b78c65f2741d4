"""
Basic assvtt usage example.

Demonstrates converting a single Dialogue line and a whole ASS file.
"""

import logging

from assvtt import convert_line, convert_file


def main():
    logging.basicConfig(level=logging.INFO)

    # Convert a single line
    line = "Dialogue: 0,0:00:02.00,0:00:05.00,Default,Narrator,0,0,0,,{\\an8}Once {\\i1}upon{\\i0} a time"
    print(convert_line(line, line_number=1))

    # Convert a file, printing each cue as it is written
    result = convert_file(
        "episode01.ass",
        "episode01.vtt",
        callback=lambda cue: print(cue, end="")
    )
    print(f"Converted {result['cues_count']} cues")
    print(f"Output saved to: {result['output_path']}")


if __name__ == "__main__":
    main()
