from importlib import resources


def load_cheatsheet() -> str:
    with resources.files(__package__).joinpath("data/commands.md").open("r", encoding="utf-8") as fh:
        return fh.read()


def load_page_template() -> str:
    with resources.files(__package__).joinpath("data/page.html").open("r", encoding="utf-8") as fh:
        return fh.read()
