"""Output formatters for SUBSIFT."""

import io
import json
import sys
from typing import Optional

from subsift.core.interfaces import Result, OutputFormatter


class TextFormatter(OutputFormatter):
    """Format results as a human readable report."""

    def __init__(self, include_sources: bool = True):
        """Initialize the text formatter.

        Args:
            include_sources: Add the per-source block to the report
        """
        self.include_sources = include_sources

    def format(self, result: Result) -> str:
        output = io.StringIO()

        output.write(f"SUBSIFT results for {result.domain}\n")
        output.write("=" * 40 + "\n\n")

        if self.include_sources:
            output.write("Sources\n")
            output.write("-" * 40 + "\n")
            for source in result.sources:
                status = "ok" if source.success else "failed"
                output.write(f"  [{status}] {source.summary_line()}\n")
            output.write("\n")

        if not result.subdomains:
            output.write("No subdomains found.\n")
            return output.getvalue()

        output.write(f"Subdomains ({len(result.subdomains)})\n")
        output.write("-" * 40 + "\n")
        for name in result.subdomains:
            addresses = result.resolved.get(name)
            if addresses:
                output.write(f"{name}  {', '.join(addresses)}\n")
            else:
                output.write(f"{name}\n")

        return output.getvalue()


class ListFormatter(OutputFormatter):
    """One subdomain per line, suitable for piping into other tools."""

    def format(self, result: Result) -> str:
        if not result.subdomains:
            return ""
        return "\n".join(result.subdomains) + "\n"


class JSONFormatter(OutputFormatter):
    """Format results as JSON."""

    def format(self, result: Result) -> str:
        output = {
            'domain': result.domain,
            'outcome': result.outcome.value,
            'sources': [
                {
                    'name': source.name,
                    'success': source.success,
                    'count': source.count,
                    'error': source.error,
                }
                for source in result.sources
            ],
            'subdomains': result.subdomains,
        }
        if result.resolved:
            output['resolved'] = result.resolved

        return json.dumps(output, indent=2)


class FormatterFactory:
    """Factory for creating output formatters."""

    FORMATTERS = {
        'text': TextFormatter,
        'json': JSONFormatter,
        'list': ListFormatter,
    }

    @classmethod
    def create_formatter(cls, format_type: str, include_sources: bool = True) -> OutputFormatter:
        """Create an output formatter based on the format type.

        ``include_sources`` only applies to the text report.

        Raises:
            ValueError: If format type is invalid
        """
        try:
            formatter_class = cls.FORMATTERS[format_type]
        except KeyError:
            raise ValueError(f"Invalid format type: {format_type}") from None

        if formatter_class is TextFormatter:
            return TextFormatter(include_sources=include_sources)
        return formatter_class()


def write_output(result: Result, format_type: str, output_file: Optional[str] = None) -> None:
    """Write formatted output to file or stdout.

    On stdout the text report leaves out the per-source block, which the
    command line already prints to stderr.

    Args:
        result: Discovery result
        format_type: Output format (text, json, list)
        output_file: Optional output file path
    """
    formatter = FormatterFactory.create_formatter(format_type, include_sources=bool(output_file))
    formatted_output = formatter.format(result)

    if output_file:
        with open(output_file, 'w') as f:
            f.write(formatted_output)
    else:
        sys.stdout.write(formatted_output)
