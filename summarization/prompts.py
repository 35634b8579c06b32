"""
Prompt template for document summarization.

The template fixes the output shape: three h1 + ul/li groups
(Main Points, Author, Date), each element with a fixed inline style.
"""

H1_STYLE = "font-size: 1.875rem; font-weight: 700; margin-bottom: 1rem; color: #1f2937;"
UL_STYLE = "list-style-type: disc; margin-left: 1.5rem; margin-bottom: 1.5rem;"
LI_STYLE = "margin-bottom: 0.5rem;"


def _section(title: str, *items: str) -> str:
    lis = "\n".join(f'  <li style="{LI_STYLE}">{item}</li>' for item in items)
    return (
        f'<h1 style="{H1_STYLE}">{title}</h1>\n'
        f'<ul style="{UL_STYLE}">\n{lis}\n</ul>'
    )


EXAMPLE_OUTPUT = "\n\n".join([
    _section("Main Points", "Point 1", "Point 2", "Point 3", "Point 4", "Point 5"),
    _section("Author", "Author name"),
    _section("Date", "Publication date"),
])


# =========================
# Summary prompt
# =========================
SUMMARY_PROMPT = """Summarize the following text by extracting at least five main points, the author, and the publication date. Format your response as simple HTML using only h1, ul, and li elements with these styles:

h1 {{ {h1_style} }}
ul {{ {ul_style} }}
li {{ {li_style} }}

RULES:
- Output exactly three sections, in this order: Main Points, Author, Date
- Each section is one h1 followed by one ul of li items
- Every element carries the inline style shown below
- If the author or date cannot be found, write "Unknown" as the single list item
- Do NOT wrap the response in code fences or add any other text

Your response should look exactly like this (but with the actual content filled in):

{example}

TEXT TO SUMMARIZE: {text}
"""


def get_summary_prompt(text: str) -> str:
    """Embed the source text in the summary template."""
    return SUMMARY_PROMPT.format(
        h1_style=H1_STYLE,
        ul_style=UL_STYLE,
        li_style=LI_STYLE,
        example=EXAMPLE_OUTPUT,
        text=text
    )
