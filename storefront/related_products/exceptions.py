"""
Exceptions raised by the related products extension.
"""


class RelatedProductsError(Exception):
    """Base class for related products errors."""


class RelationTypeNotFound(RelatedProductsError, LookupError):
    """
    No RelationType applicable to the model matches the requested name.

    Raised only by the strict accessor (``HasRelations.require_related``);
    the lenient accessors report the same condition by returning None/False.
    """

    def __init__(self, name, model_label):
        self.name = name
        self.model_label = model_label
        super().__init__(
            f"No relation type named '{name}' applies to {model_label}"
        )
