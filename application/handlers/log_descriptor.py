from __future__ import annotations

from typing import Any, Mapping

from domain.errors import ConstructionError
from domain.log_request import decode_label

DEFAULT_SUMMARY = "Click for details"


class LogStepDescriptor:
    function_name = "logger"
    display_name = "Logger"

    def arguments_to_string(self, named_args: Mapping[str, Any]) -> str:
        """
        Short summary of a logger call for display next to the node.

        Prefers the decoded label_encoded, since hosts may have nulled the
        plain label, then the literal label.
        """
        encoded = named_args.get("label_encoded")
        if encoded is not None:
            try:
                return decode_label(str(encoded))
            except ConstructionError:
                # undecodable: fall back to the plain label
                pass
        label = named_args.get("label")
        if label is None:
            return DEFAULT_SUMMARY
        return str(label)
