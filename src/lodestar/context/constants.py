"""Extension tables and relevance weights for file references."""

# Extensions the mention grammar recognizes as an explicit suffix
MENTION_EXTENSIONS = ("js", "jsx", "ts", "tsx", "css", "scss", "json", "html")

# Trailing punctuation stripped from a captured mention
MENTION_TRAILING_PUNCTUATION = ".,;!?"

IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".svg", ".webp", ".ico",
})

# Commonly-edited source extensions (ranking bonus)
COMMON_SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    ".js", ".jsx", ".ts", ".tsx", ".vue", ".py", ".java", ".c", ".cpp",
})

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    ".js": "javascript",
    ".ts": "typescript",
    ".jsx": "javascript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".php": "php",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".json": "json",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".sh": "bash",
    ".sql": "sql",
}

DEFAULT_LANGUAGE = "text"

# Relevance weights (additive, higher wins)
SCORE_EXACT_PATH = 1000
SCORE_PATH_CONTAINS = 500
SCORE_DIRECTORY_CONTAINS = 300
SCORE_NAME_EXACT = 200
SCORE_NAME_PREFIX = 100
SCORE_NAME_CONTAINS = 50
SCORE_COMMON_EXTENSION = 20

# Binary-prefix size units for image summaries
SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
