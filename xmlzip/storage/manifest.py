"""YAML manifest describing the fragments of a split archive."""

import io
from pathlib import Path

import ruamel.yaml

from xmlzip import __version__
from xmlzip.models import SplitReport


def generate_manifest_dict(report: SplitReport, archive: str) -> dict:
    """Generate a manifest dictionary from a split report.

    Args:
        report: Report returned by the splitter
        archive: Name of the zip archive the fragments were written to

    Returns:
        Dictionary ready for YAML serialization
    """
    return {
        "generator": f"xmlzip {__version__}",
        "archive": archive,
        "split_element": report.split_element,
        "batch_size": report.batch_size,
        "fragment_count": len(report.fragments),
        "split_element_count": report.total_split_elements,
        "fragments": [
            {"name": fragment.name, "split_elements": fragment.split_count}
            for fragment in report.fragments
        ],
    }


def save_manifest(report: SplitReport, archive: str, output_file: Path) -> Path:
    """Save a split report as a YAML manifest.

    Args:
        report: Report returned by the splitter
        archive: Name of the zip archive the fragments were written to
        output_file: Path of the manifest to write

    Returns:
        Path to the saved file
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)

    manifest = generate_manifest_dict(report, archive)

    yaml = ruamel.yaml.YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 100
    yaml.explicit_start = True  # Add --- document start

    # Write to buffer first, then strip trailing spaces
    buffer = io.StringIO()
    yaml.dump(manifest, buffer)
    content = "\n".join(line.rstrip() for line in buffer.getvalue().splitlines()) + "\n"

    # Write with Unix line endings
    with open(output_file, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)

    return output_file
