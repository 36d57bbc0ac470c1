from typing import List

from pydantic import Field

from docsite.models.members import (
    Blocks,
    Functions,
    Name,
    Properties,
    Record,
    Text,
    TextList,
    referenced_types,
)


class LegacyPage(Record):
    """One legacy (``.yml``) documentation page.

    A page documenting an API type sets ``type``; when that type builds on
    another one it also sets ``extends`` and inherits the base page's
    functions and properties once the extension resolver has run.
    """

    resource_path: str = ""  # normalized route key, stamped by the walker
    source_path: str = ""  # content-root-relative file path
    title: Text = ""
    description: Text = ""
    keywords: TextList = []
    type: Name = ""
    extends: Name = ""
    blocks: Blocks = []
    constructors: Functions = []
    functions: Functions = []
    properties: Properties = []
    extension_base_applied: bool = Field(
        default=False,
        description="True once the base type's members have been merged in.",
    )

    @property
    def display_title(self) -> str:
        return self.title or self.type

    @property
    def is_not_creatable_object(self) -> bool:
        return bool(self.type) and not self.constructors

    @property
    def ready_to_be_base(self) -> bool:
        """A page can serve as a base once its own inheritance is settled."""
        return not self.extends or self.extension_base_applied

    def apply_extension_base(self, base: "LegacyPage") -> None:
        """Merge the inheritable members of *base* into this page.

        Members already declared locally (same name) win.  Inherited
        members are deep copies tagged with the type that first declared
        them, so *base* is never modified.
        """
        local_functions = {f.name for f in self.functions}
        for func in base.functions:
            if func.name not in local_functions:
                origin = func.extended_from or base.type
                self.functions.append(func.model_copy(deep=True, update={"extended_from": origin}))

        local_properties = {p.name for p in self.properties}
        for prop in base.properties:
            if prop.name not in local_properties:
                origin = prop.extended_from or base.type
                self.properties.append(prop.model_copy(deep=True, update={"extended_from": origin}))

        self.extension_base_applied = True

    def referenced_types(self) -> List[str]:
        names = [self.extends] if self.extends else []
        names += referenced_types(self.constructors + self.functions, self.properties)
        return list(dict.fromkeys(names))
