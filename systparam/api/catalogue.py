import logging
from collections.abc import Iterable, Iterator
from typing import Self

from systparam.context.header import ParameterHeader
from systparam.exceptions import InvalidParameterHeaderError
from systparam.validation import find_violation

logger = logging.getLogger(__name__)


class ParameterCatalogue:
    """
    An in-memory index of validated parameter headers keyed by parameter id.

    Headers are checked and copied when added, so every header held by the
    catalogue is internally consistent and unaffected by later changes to the
    header that was passed in. Iteration follows insertion order. Ids are only
    unique within one catalogue.

    Parameters
    ----------
    headers : Iterable[ParameterHeader], optional
        Headers to add on construction.
    """

    def __init__(self, headers: Iterable[ParameterHeader] = ()):
        self._headers: dict[int, ParameterHeader] = {}
        for header in headers:
            self.add(header)

    def add(self, header: ParameterHeader) -> Self:
        """
        Add a header to the catalogue.

        Parameters
        ----------
        header : ParameterHeader
            The header to add.

        Returns
        -------
        ParameterCatalogue
            Self for method chaining.

        Raises
        ------
        InvalidParameterHeaderError
            If the header fails validation.
        ValueError
            If a header with the same parameter id is already catalogued.
        """
        violation = find_violation(header)
        if violation is not None:
            raise InvalidParameterHeaderError.from_violation(violation)

        parameter_id = header.parameter_id
        if parameter_id is None:
            raise InvalidParameterHeaderError(
                f"ParameterHeader '{header.display_name}' has no parameter_id."
            )
        if parameter_id in self._headers:
            existing = self._headers[parameter_id]
            raise ValueError(
                (
                    f"Duplicate parameter id {parameter_id}: "
                    f"'{header.display_name}' clashes with "
                    f"'{existing.display_name}'."
                )
            )

        # Later changes to the caller's header must not reach the catalogue
        self._headers[parameter_id] = header.model_copy(deep=True)
        logger.debug(f"Catalogued parameter {parameter_id} '{header.display_name}'")
        return self

    def __contains__(self, parameter_id: object) -> bool:
        return parameter_id in self._headers

    def __len__(self) -> int:
        return len(self._headers)

    def __iter__(self) -> Iterator[ParameterHeader]:
        return iter(self._headers.values())

    @property
    def parameter_ids(self) -> list[int]:
        return list(self._headers)

    def get(self, parameter_id: int) -> ParameterHeader:
        """
        Return the header with the given id.

        Raises
        ------
        KeyError
            If no header has that id.
        """
        try:
            return self._headers[parameter_id]
        except KeyError:
            raise KeyError(
                f"No parameter with id {parameter_id}. "
                f"Available: {self.parameter_ids}"
            ) from None

    def get_by_name(self, display_name: str) -> ParameterHeader | None:
        """Return the first header with exactly this display name, if any."""
        for header in self._headers.values():
            if header.display_name == display_name:
                return header
        return None

    def find_containing(self, fragment: str) -> list[ParameterHeader]:
        """Return every header whose display name contains `fragment`."""
        return [h for h in self._headers.values() if fragment in h.display_name]

    def responseless_for(self, parameter_id: int) -> list[ParameterHeader]:
        """
        Return the headers whose response is recorded under `parameter_id`.

        Parameters
        ----------
        parameter_id : int
            The id of the parameter carrying the combined response.

        Returns
        -------
        list[ParameterHeader]
            Responseless headers pointing at `parameter_id`, in insertion order.
        """
        return [
            h
            for h in self._headers.values()
            if h.is_responseless and h.response_parameter_id == parameter_id
        ]

    @property
    def has_responseless_parameters(self) -> bool:
        return any(h.is_responseless for h in self._headers.values())

    def check_response_targets(self) -> None:
        """
        Check that every responseless header points at a catalogued parameter.

        Raises
        ------
        InvalidParameterHeaderError
            If any responseless header names a response parameter that is not in
            the catalogue.
        """
        dangling = [
            h
            for h in self._headers.values()
            if h.is_responseless and h.response_parameter_id not in self._headers
        ]
        if dangling:
            missing = ", ".join(
                f"{h.parameter_id}:'{h.display_name}' -> {h.response_parameter_id}"
                for h in dangling
            )
            raise InvalidParameterHeaderError(
                f"Responseless parameters reference uncatalogued response "
                f"parameters: {missing}."
            )
