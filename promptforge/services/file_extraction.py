# /promptforge/services/file_extraction.py

"""
Turns a model's free-text completion into an ordered list of GeneratedFile
records.

Extraction is two-staged. The primary stage reads the tagged
`<file path="..." type="...">` blocks the system prompt asks for. Only when
that finds nothing does the fallback stage read fenced code blocks and infer
a filename for each one. Document order is extraction order, and duplicate
paths are kept as separate records.

`ensure_essential_files` then backfills the manifest, build config and HTML
entry point a Vite + React project needs to run, without touching anything
the model already produced.
"""

import json
import logging
import re
from typing import List, Optional

from ..models.generation_model import GeneratedFile

logger = logging.getLogger(__name__)

FILE_BLOCK_PATTERN = re.compile(r'<file\s+path="([^"]+)"\s+type="([^"]+)"\s*>(.*?)</file>', re.DOTALL)
FENCED_BLOCK_PATTERN = re.compile(r"```([\w+#.-]*)[ \t]*([^\n]*)\n(.*?)```", re.DOTALL)
FILENAME_HINT_PATTERN = re.compile(
    r"(?:file(?:name)?|path|name)\s*[:=][\s`'\"*]*([\w@./-]+\.\w+)",
    re.IGNORECASE,
)
BARE_FILENAME_PATTERN = re.compile(r"^[\w@./-]+\.\w+$")

HINT_WINDOW_CHARS = 160
DEFAULT_FENCE_TYPE = "typescript"
FALLBACK_DIRECTORY = "src/"

TYPE_EXTENSIONS = {
    "typescript": "tsx",
    "javascript": "jsx",
    "tsx": "tsx",
    "ts": "ts",
    "jsx": "jsx",
    "js": "js",
    "css": "css",
    "scss": "scss",
    "html": "html",
    "json": "json",
    "markdown": "md",
    "md": "md",
    "python": "py",
    "yaml": "yml",
    "yml": "yml",
}

PROJECT_ROOT_PREFIXES = (
    "src/",
    "public/",
    "package.json",
    "index.html",
    "vite.config.",
    "tsconfig",
    "tailwind.config.",
    "postcss.config.",
    "README",
    ".gitignore",
    ".env",
)


# --- Primary Extraction ---

def parse_generated_files(content: str) -> List[GeneratedFile]:
    """Extracts tagged file blocks, falling back to fenced code blocks only if there are none."""
    files = [
        GeneratedFile(path=path.strip(), type=file_type.strip(), content=body.strip())
        for path, file_type, body in FILE_BLOCK_PATTERN.findall(content)
    ]
    if files:
        return files

    files = extract_code_blocks(content)
    if files:
        logger.warning(f"No <file> blocks found; recovered {len(files)} file(s) from fenced code blocks.")
    return files


# --- Fallback Extraction ---

def get_extension_from_type(file_type: str) -> str:
    return TYPE_EXTENSIONS.get(file_type.lower(), "txt")


def _filename_from_info_string(info: str) -> Optional[str]:
    """Reads a filename written on the fence line itself, e.g. ```tsx // file: src/App.tsx"""
    candidate = info.strip()
    for marker in ("<!--", "//", "#", "/*"):
        if candidate.startswith(marker):
            candidate = candidate[len(marker):].strip()
    candidate = candidate.rstrip("*/->").strip()
    hinted = FILENAME_HINT_PATTERN.search(candidate)
    if hinted:
        return hinted.group(1)
    if BARE_FILENAME_PATTERN.match(candidate):
        return candidate
    return None


def _filename_from_preceding_text(content: str, block_start: int, window_floor: int) -> Optional[str]:
    window_start = max(window_floor, block_start - HINT_WINDOW_CHARS)
    hints = FILENAME_HINT_PATTERN.findall(content[window_start:block_start])
    return hints[-1] if hints else None


def _place_in_project(filename: str) -> str:
    filename = filename.strip()
    while filename.startswith(("./", "/")):
        filename = filename[2:] if filename.startswith("./") else filename[1:]
    if filename.startswith(PROJECT_ROOT_PREFIXES):
        return filename
    return FALLBACK_DIRECTORY + filename


def extract_code_blocks(content: str) -> List[GeneratedFile]:
    files: List[GeneratedFile] = []
    previous_block_end = 0

    for match in FENCED_BLOCK_PATTERN.finditer(content):
        language, info, code = match.groups()
        file_type = language or DEFAULT_FENCE_TYPE

        filename = _filename_from_info_string(info) or _filename_from_preceding_text(
            content, match.start(), previous_block_end
        )
        if filename:
            path = _place_in_project(filename)
        else:
            path = f"{FALLBACK_DIRECTORY}file-{len(files)}.{get_extension_from_type(file_type)}"

        files.append(GeneratedFile(path=path, content=code.strip(), type=file_type))
        previous_block_end = match.end()

    return files


# --- Essential-File Backfill ---

DEFAULT_PACKAGE_JSON = json.dumps({
    "name": "generated-app",
    "version": "0.1.0",
    "private": True,
    "type": "module",
    "scripts": {
        "dev": "vite",
        "build": "tsc && vite build",
        "preview": "vite preview"
    },
    "dependencies": {
        "react": "^18.3.1",
        "react-dom": "^18.3.1"
    },
    "devDependencies": {
        "@types/react": "^18.3.12",
        "@types/react-dom": "^18.3.1",
        "@vitejs/plugin-react": "^4.3.4",
        "typescript": "^5.7.2",
        "vite": "^6.0.5"
    }
}, indent=2)

DEFAULT_VITE_CONFIG = """import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

export default defineConfig({
  plugins: [react()],
})"""

DEFAULT_INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Generated App</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.tsx"></script>
  </body>
</html>"""

# (path marker matched by substring, default file appended when the marker is absent)
ESSENTIAL_FILES = (
    ("package.json", GeneratedFile(path="package.json", type="json", content=DEFAULT_PACKAGE_JSON)),
    ("vite.config", GeneratedFile(path="vite.config.ts", type="typescript", content=DEFAULT_VITE_CONFIG)),
    ("index.html", GeneratedFile(path="index.html", type="html", content=DEFAULT_INDEX_HTML)),
)


def ensure_essential_files(files: List[GeneratedFile]) -> List[GeneratedFile]:
    """Returns `files` plus a default for every missing essential file. Never removes or replaces."""
    result = list(files)
    for marker, default_file in ESSENTIAL_FILES:
        if not any(marker in f.path for f in result):
            logger.warning(f"Completion had no '{marker}'; adding default {default_file.path}.")
            result.append(default_file.model_copy())
    return result


def extract_project_files(content: str) -> List[GeneratedFile]:
    """Full extraction policy used by the pipeline. An empty extraction stays empty."""
    files = parse_generated_files(content)
    if not files:
        return files
    return ensure_essential_files(files)
