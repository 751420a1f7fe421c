"""
Interpolated text handling.

`Hello #{@user.name}` becomes `t('.hello_user_name', user_name: (@user.name))`
in the template and `Hello %{user_name}` in the locale document.
"""

from typing import List, Optional, Tuple

from haml_localizer.core.key_namer import translate_call
from haml_localizer.core.patterns import INTERPOLATION
from haml_localizer.core.string_helpers import interpolation_names
from haml_localizer.utils.config import ExtractorSettings


class InterpolationHelper:
    def __init__(self, text: str, t_name: str, settings: Optional[ExtractorSettings] = None):
        self.text = text
        self.t_name = t_name
        self.settings = settings or ExtractorSettings()

    def interpolations(self) -> List[Tuple[str, str]]:
        """(variable name, ruby expression) pairs, without repeats."""
        expressions = [expression.strip() for expression in INTERPOLATION.findall(self.text)]
        names = interpolation_names(self.text, self.settings.max_key_length)
        pairs: List[Tuple[str, str]] = []
        for name, expression in zip(names, expressions):
            if (name, expression) not in pairs:
                pairs.append((name, expression))
        return pairs

    def keyname_with_vars(self) -> str:
        arguments = ", ".join(f"{name}: ({expression})" for name, expression in self.interpolations())
        return translate_call(self.t_name, self.settings, arguments)
