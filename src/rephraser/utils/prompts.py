POLITE_PROMPT = """以下のテキストを丁寧な表現に変換してください。元の意味を保ったまま、敬語や丁寧語を適切に使用してください。

テキスト:
{text}

丁寧な表現:"""

ORGANIZE_PROMPT = """以下のテキストを論理的に整理し、読みやすく構造化してください。

テキスト:
{text}

整理されたテキスト:"""

SUMMARIZE_PROMPT = """以下のテキストを簡潔に要約してください。

テキスト:
{text}

要約:"""

# (name, display_name, prompt_template) in declaration order
DEFAULT_ACTIONS = [
    ("polite", "丁寧に", POLITE_PROMPT),
    ("organize", "整理する", ORGANIZE_PROMPT),
    ("summarize", "要約", SUMMARIZE_PROMPT),
]
