r"""Build the workspace folder tree and render per-page navigation menus.

A workspace export discovers every Markdown document under a root, builds one
:class:`FolderEntry` tree from their root-relative paths, and then renders the
menu once per document. The tree is shared and never mutated after
construction: :func:`navigation_entries` computes the per-target decoration
(relative hrefs and active flags) as fresh dictionaries on every call.

Example
-------
>>> from md_pages.navigation import build_folder_tree, navigation_entries
>>> root = build_folder_tree(["a/x.md", "a/b/y.md", "z.md"], lambda path: path)
>>> [folder.name for folder in root.folders], [file.file_name for file in root.files]
(['a'], ['z.md'])
>>> [entry["href"] for entry in navigation_entries(root, "a/b/y.md") if entry["kind"] == "file"]
['../../z.html']
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ
from pathlib import Path, PurePosixPath

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import HTML_SUFFIX

if typ.TYPE_CHECKING:
    import collections.abc as cabc

ROOT_ALIAS = "root"


@dc.dataclass(slots=True)
class FileEntry:
    """Document leaf in the folder tree.

    Attributes
    ----------
    file_name : str
        Base name of the document (``"guide.md"``).
    title : str
        Document title shown as the link label.
    relative_path : str
        POSIX path of the document relative to the export root.
    """

    file_name: str
    title: str
    relative_path: str


@dc.dataclass(slots=True)
class FolderEntry:
    """Folder node in the tree; children keep sorted-path insertion order."""

    path: str
    name: str
    alias_name: str
    folders: list[FolderEntry] = dc.field(default_factory=list)
    files: list[FileEntry] = dc.field(default_factory=list)

    def find_folder(self, name: str) -> FolderEntry | None:
        """Return the direct child folder called ``name``, if any."""
        return next((folder for folder in self.folders if folder.name == name), None)


def build_folder_tree(
    paths: cabc.Iterable[str],
    title_lookup: cabc.Callable[[str], str],
    *,
    root_name: str = "",
    folder_aliases: cabc.Mapping[str, str] | None = None,
) -> FolderEntry:
    """Build the folder tree for root-relative document ``paths``.

    Parameters
    ----------
    paths : Iterable[str]
        Document paths relative to the export root. They are sorted
        lexicographically, which fixes the order of siblings.
    title_lookup : Callable[[str], str]
        Returns the display title for a relative document path.
    root_name : str, optional
        Name recorded on the root entry (usually the root directory's name).
    folder_aliases : Mapping[str, str], optional
        Display names keyed by root-relative folder path.

    Returns
    -------
    FolderEntry
        Root entry with path ``""`` and alias ``"root"``.
    """
    aliases = folder_aliases or {}
    root = FolderEntry(path="", name=root_name, alias_name=ROOT_ALIAS)
    for relative in sorted(PurePosixPath(path).as_posix() for path in paths):
        *folder_parts, file_name = relative.split("/")
        pointer = root
        for part in folder_parts:
            child = pointer.find_folder(part)
            if child is None:
                folder_path = posixpath.join(pointer.path, part)
                child = FolderEntry(
                    path=folder_path,
                    name=part,
                    alias_name=aliases.get(folder_path, part),
                )
                pointer.folders.append(child)
            pointer = child
        pointer.files.append(
            FileEntry(
                file_name=file_name,
                title=title_lookup(relative),
                relative_path=relative,
            )
        )
    return root


def html_href(path: str) -> str:
    """Return ``path`` with its document suffix replaced by ``.html``."""
    pure = PurePosixPath(path)
    if not pure.suffix:
        return f"{path}{HTML_SUFFIX}"
    return pure.with_suffix(HTML_SUFFIX).as_posix()


def _relative_to_dir(path: str, start: str) -> str:
    return posixpath.relpath(path or ".", start=start or ".")


def _is_on_target_path(folder_path: str, target_dir: str) -> bool:
    """Return True when ``folder_path`` is ``target_dir`` or one of its ancestors."""
    return target_dir == folder_path or target_dir.startswith(f"{folder_path}/")


def navigation_entries(root: FolderEntry, target: str) -> list[dict[str, typ.Any]]:
    """Return the decorated menu entries of ``root`` as seen from ``target``.

    Parameters
    ----------
    root : FolderEntry
        Shared folder tree; it is only read.
    target : str
        Root-relative POSIX path of the page being rendered.

    Returns
    -------
    list[dict[str, Any]]
        Entries with ``kind`` (``"file"`` or ``"folder"``), ``label``,
        ``href``, ``active``, ``path``, and (folders only) ``children``. Within
        each folder, files precede subfolders.
    """
    target = PurePosixPath(target).as_posix()
    target_dir = posixpath.dirname(target)

    def _folder_children(folder: FolderEntry) -> list[dict[str, typ.Any]]:
        entries: list[dict[str, typ.Any]] = [
            {
                "kind": "file",
                "label": entry.title,
                "href": html_href(_relative_to_dir(entry.relative_path, target_dir)),
                "active": entry.relative_path == target,
                "path": entry.relative_path,
            }
            for entry in folder.files
        ]
        for child in folder.folders:
            entries.append(
                {
                    "kind": "folder",
                    "label": child.alias_name,
                    "href": _relative_to_dir(child.path, target_dir),
                    "active": _is_on_target_path(child.path, target_dir),
                    "path": child.path,
                    "children": _folder_children(child),
                }
            )
        return entries

    return _folder_children(root)


class NavigationRenderer:
    """Render the file navigation panel for each exported page."""

    def __init__(
        self,
        *,
        title: str = "Documents",
        remark: str = "",
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        title : str, optional
            Heading shown above the menu.
        remark : str, optional
            Short note rendered beside the heading; omitted when empty.
        templates_dir : Path, optional
            Directory containing ``navigation.jinja``; defaults to the package
            templates.
        """
        self.title = title
        self.remark = remark
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("navigation.jinja")

    def render(self, root: FolderEntry, target: str) -> str:
        """Return the navigation markup for the page at ``target``."""
        return self.template.render(
            entries=navigation_entries(root, target),
            title=self.title,
            remark=self.remark,
        )


__all__ = [
    "FileEntry",
    "FolderEntry",
    "NavigationRenderer",
    "build_folder_tree",
    "html_href",
    "navigation_entries",
]
