"""assist command — interactive rewrite of a passage with the editing assistant."""

from __future__ import annotations

import click

from pull2press_cli.common import console, pipeline_errors
from pull2press_core.assistant import ConversationContext, stream_edit
from pull2press_core.pipeline import get_generator


@click.command("assist")
@click.option("--text", "selected_text", default=None, help="Passage to work on. Read from stdin when omitted (single answer).")
@click.option("--instruction", "-i", default=None, help="What to do with the passage. Prompts when omitted.")
@click.pass_context
def assist_cmd(ctx, selected_text: str | None, instruction: str | None):
    """Ask the AI editing assistant to rewrite a passage.

    After the first answer you can keep refining; earlier turns are sent
    along as context. Submit an empty instruction to finish. When the
    passage is piped on stdin, --instruction is required and only one
    answer is given.
    """
    piped = selected_text is None
    if piped:
        if instruction is None:
            raise click.UsageError("Pass --instruction when the passage is read from stdin.")
        selected_text = click.get_text_stream("stdin").read()
    if not selected_text.strip():
        raise click.BadParameter("No text given.", param_hint="--text")

    context = ConversationContext()
    with pipeline_errors():
        generator = get_generator(ctx.obj["config"])
        if instruction is None:
            instruction = click.prompt("Instruction", default="", show_default=False)
        while instruction and instruction.strip():
            for delta in stream_edit(selected_text, instruction, generator, context):
                click.echo(delta, nl=False)
            click.echo()
            console.print(f"[dim]~{context.total_tokens()} tokens of context[/dim]")
            if piped:
                break
            instruction = click.prompt("Follow-up (empty to finish)", default="", show_default=False)
