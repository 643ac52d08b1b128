"""Navigation links for the current language."""

LINKS = {
    "en": (("", "Home"), ("about", "About")),
    "fr": (("", "Accueil"), ("apropos", "À propos")),
}


class Nav:
    def __init__(self, app) -> None:
        self.default = app.get("language_default")

    def links(self, language: str | None) -> tuple[tuple[str, str], ...]:
        return LINKS.get(language or self.default, LINKS[self.default])


def setup(app) -> Nav:
    return Nav(app)
