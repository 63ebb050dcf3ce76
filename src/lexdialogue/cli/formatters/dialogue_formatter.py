"""Formatter for parsed dialogue documents."""

from __future__ import annotations

from rich.text import Text
from rich.tree import Tree

from lexdialogue.cli.formatters.base import OutputFormatter
from lexdialogue.export import (
    ExportFormat,
    export_dialogue,
    line_to_dict,
    step_to_dict,
    value_to_dict,
)
from lexdialogue.parser.models import Dialogue, Page


class DialogueFormatter(OutputFormatter[Dialogue]):
    """Render a parsed dialogue as a tree or as JSON."""

    def to_json(self, dialogue: Dialogue) -> str:
        return export_dialogue(dialogue, ExportFormat.JSON)

    def render(self, dialogue: Dialogue) -> Tree:
        """Build a rich tree with one branch per document table.

        Script content is wrapped in ``Text`` so brackets in dialogue are
        never read as console markup.
        """
        root = Tree(Text("Dialogue", style="bold"))

        actors = root.add(Text(f"Actors ({len(dialogue.actors)})", style="cyan"))
        for key, actor in dialogue.actors.items():
            branch = actors.add(Text(f"{key} -> {actor.name!r}"))
            for name, value in actor.properties.items():
                branch.add(Text(f"{name}: {value_to_dict(value)}"))

        variables = root.add(
            Text(f"Variables ({len(dialogue.variables)})", style="green")
        )
        for name, value in dialogue.variables.items():
            variables.add(Text(f"{name}: {value_to_dict(value)}"))

        functions = root.add(
            Text(f"Functions ({len(dialogue.functions)})", style="magenta")
        )
        for name, function in dialogue.functions.items():
            args = (
                {arg: value_to_dict(v) for arg, v in function.args.items()}
                if function.args is not None
                else None
            )
            result = (
                value_to_dict(function.result) if function.result is not None else None
            )
            functions.add(Text(f"{name}(args={args}, result={result})"))

        sections = root.add(
            Text(f"Sections ({len(dialogue.sections)})", style="yellow")
        )
        for section in dialogue.sections:
            branch = sections.add(Text(f"#{section.name} ({len(section.steps)} steps)"))
            for step in section.steps:
                if isinstance(step, Page):
                    page = branch.add(Text("Page"))
                    for line in step.lines:
                        page.add(Text(str(line_to_dict(line))))
                else:
                    branch.add(Text(str(step_to_dict(step))))

        return root
