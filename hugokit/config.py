from __future__ import annotations

from pathlib import Path

PACKAGE_MANAGER = "choco"
SITE_GENERATOR = "hugo"
VERSION_CONTROL = "git"
REQUIRED_TOOLS = (PACKAGE_MANAGER, SITE_GENERATOR, VERSION_CONTROL)

# Package ids passed to `choco install`.
INSTALL_PACKAGES = {
    SITE_GENERATOR: "hugo-extended",
    VERSION_CONTROL: "git",
}

PACKAGE_MANAGER_INSTALL_URL = "https://chocolatey.org/install"

THEME_NAME = "PaperMod"
THEME_URL = "https://github.com/adityatelange/hugo-PaperMod.git"
THEME_PATH = "themes/PaperMod"

INITIAL_COMMIT_MESSAGE = "Initial commit: Hugo site scaffold"
CONTENT_COMMIT_MESSAGE = "Configure PaperMod theme with archives and search pages"
DEPLOY_COMMIT_MESSAGE = "Add custom footer and GitHub Pages deploy workflow"

WEBSITE_NAME_PROMPT = "Website name"
GITHUB_USERNAME_PROMPT = "GitHub username"

# Site-relative path -> template file name.
SITE_TEMPLATES = {
    "hugo.yaml": "hugo.yaml.j2",
    "content/archives.md": "archives.md.j2",
    "content/search.md": "search.md.j2",
    "layouts/partials/footer.html": "footer.html.j2",
    ".github/workflows/deploy.yml": "deploy.yml.j2",
}

CONFIG_FILES = ("hugo.yaml", "content/archives.md", "content/search.md")
DEPLOY_FILES = ("layouts/partials/footer.html", ".github/workflows/deploy.yml")
MANAGED_FILES = CONFIG_FILES + DEPLOY_FILES


def templates_root() -> Path:
    return Path(__file__).resolve().parent / "templates"
