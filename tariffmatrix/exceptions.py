class TariffMatrixError(Exception): ...


class FormatError(TariffMatrixError, ValueError): ...


class GridError(TariffMatrixError, ValueError): ...


class RuleError(TariffMatrixError): ...


class CoverageError(TariffMatrixError): ...


class EmptySelectionError(TariffMatrixError): ...


def require(
    condition: bool, message: str, exc: type[TariffMatrixError] = TariffMatrixError
):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
