from typing import List

from docsite.models.members import Blocks, Functions, Properties, Record, Text, TextList, referenced_types


class Module(Record):
    """One new-format (``.json``) module documentation record.

    ``name`` comes from the last segment of the module's route, never from
    the file body.
    """

    name: str = ""
    resource_path: str = ""
    source_path: str = ""
    description: Text = ""
    keywords: TextList = []
    blocks: Blocks = []
    functions: Functions = []
    properties: Properties = []

    @property
    def display_title(self) -> str:
        return self.name

    def referenced_types(self) -> List[str]:
        return referenced_types(self.functions, self.properties)
