"""Configuration for message decoding.

This module provides the DecoderConfig dataclass that controls validation and
error policy for the decoder and the message dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass

from .utils.timestamps import MAX_TIMESTAMP_NS, MIN_TIMESTAMP_NS


@dataclass
class DecoderConfig:
    """Decoder validation and skip policy.

    Attributes:
        min_timestamp_ns: Exclusive lower bound for message timestamps
            (default 2013-10-25T00:00:00Z, when IEX began trading).

        max_timestamp_ns: Exclusive upper bound for message timestamps
            (default 2100-01-01T00:00:00Z).

        validate_timestamps: Reject messages whose timestamp falls outside the
            bounds with BlockDecodeError (default True).

        skip_unknown_types: When iterating a decoder, skip blocks with an
            unrecognized type byte instead of raising UnknownMessageTypeError
            (default True). ``get_next_message()`` always raises.

    Examples:
        ```python
        from iexdecode import DecoderConfig, IexDecoder

        # Surface unknown message types while iterating
        config = DecoderConfig(skip_unknown_types=False)

        # Synthetic captures with arbitrary timestamps
        config = DecoderConfig(validate_timestamps=False)

        decoder = IexDecoder(config=config)
        ```
    """

    min_timestamp_ns: int = MIN_TIMESTAMP_NS
    max_timestamp_ns: int = MAX_TIMESTAMP_NS
    validate_timestamps: bool = True
    skip_unknown_types: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.min_timestamp_ns < 0:
            raise ValueError(f"min_timestamp_ns must be >= 0, got {self.min_timestamp_ns}")

        if self.max_timestamp_ns <= self.min_timestamp_ns:
            raise ValueError(
                f"max_timestamp_ns must be > min_timestamp_ns, got "
                f"{self.max_timestamp_ns} <= {self.min_timestamp_ns}"
            )
