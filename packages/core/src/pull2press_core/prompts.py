"""Prompt composition for blog post generation.

Pure functions of their inputs: composing twice from the same PR data and
options yields byte-identical prompts, which keeps regenerations comparable
and makes the builders trivial to test.

Precedence for the system prompt additions (first match wins for 2-4):
  1. fixed first-person opening              (always)
  2. preset system_prompt_modifier           (PresetOption only)
  3. style guidance from writing samples
  4. one-line tone/length preference
  5. custom instructions                     (whenever present)
  6. fixed closing checklist                 (always)
"""

from __future__ import annotations

from pull2press_core.errors import InvalidInputError
from pull2press_core.models import (
    CustomOption,
    PresetOption,
    PullRequestData,
    RegenerationOptions,
    UserPreferences,
)
from pull2press_core.style import analyze_writing_style, style_guidance

DEFAULT_TEMPERATURE = 0.7

SYSTEM_OPENING = (
    "You are a software engineer writing about your own work. Write in first person throughout "
    'the entire post ("I implemented", "I discovered", "I chose", etc.). Your tone should be '
    "pragmatic and informative - focus on technical details, implementation decisions, and "
    "practical insights."
)

SYSTEM_CHECKLIST = """When writing:
- Write exclusively in first person - you are the developer who made these changes
- Be pragmatic and informative - focus on what was done and why
- Share technical insights and implementation details
- Explain your reasoning for architectural and design decisions
- Include relevant code snippets that demonstrate key changes
- Structure content with clear, descriptive headings
- Discuss challenges encountered and how you solved them
- End with practical takeaways and lessons learned"""

DEFAULT_USER_INSTRUCTIONS = """Please write a comprehensive blog post that:
1. Explains the purpose and context of these changes
2. Discusses the technical implementation details
3. Highlights any important code changes
4. Includes relevant code examples where appropriate
5. Concludes with the impact and benefits of these changes"""

USER_CLOSING = "Use a professional but engaging tone and format the post in Markdown."


def build_system_prompt(
    preferences: UserPreferences | None = None,
    options: RegenerationOptions | None = None,
) -> str:
    sections = [SYSTEM_OPENING]

    if isinstance(options, PresetOption) and options.preset.system_prompt_modifier:
        sections.append(options.preset.system_prompt_modifier)
    elif preferences is not None and preferences.writing_samples:
        style = analyze_writing_style(preferences.writing_samples)
        sections.append(f"Adapt your writing style to match the user's preferences: {style_guidance(style)}")
    elif preferences is not None:
        sections.append(
            f"Write in a {preferences.preferred_tone} tone with {preferences.preferred_length} length content."
        )

    if preferences is not None and preferences.custom_instructions:
        sections.append(f"Additional user instructions: {preferences.custom_instructions}")

    sections.append(SYSTEM_CHECKLIST)
    return "\n\n".join(sections)


def build_user_prompt(pr_data: PullRequestData, options: RegenerationOptions | None = None) -> str:
    commit_lines = "\n".join(f"- {commit.message}" for commit in pr_data.commits)
    file_lines = "\n".join(
        f"- {f.filename} ({f.additions} additions, {f.deletions} deletions)" for f in pr_data.files
    )

    prompt = f"""Write a detailed technical blog post about the following GitHub pull request:

Title: {pr_data.title}
Description: {pr_data.description}

Changes:
- Number of commits: {len(pr_data.commits)}
- Number of files modified: {len(pr_data.files)}

Commit messages:
{commit_lines}

Files changed:
{file_lines}"""

    if isinstance(options, PresetOption) and options.preset.user_prompt_modifier:
        instructions = options.preset.user_prompt_modifier
    elif isinstance(options, CustomOption) and options.prompt.strip():
        instructions = options.prompt
    else:
        instructions = DEFAULT_USER_INSTRUCTIONS

    return f"{prompt}\n\n{instructions}\n\n{USER_CLOSING}"


def get_temperature(options: RegenerationOptions | None = None) -> float:
    """Explicit override > preset temperature > DEFAULT_TEMPERATURE."""
    if options is None:
        return DEFAULT_TEMPERATURE
    if options.temperature is not None:
        temperature = options.temperature
    elif isinstance(options, PresetOption):
        temperature = options.preset.temperature
    else:
        temperature = DEFAULT_TEMPERATURE

    if not 0.0 <= temperature <= 1.0:
        raise InvalidInputError(f"Temperature must be between 0 and 1, got {temperature}")
    return float(temperature)
