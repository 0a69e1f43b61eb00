"""
Decoding Package - Reply Records to Field Trees.
"""

from kamailio_exporter.decoding.response_decoder import (
    ResponseShapeDecoder,
    decode_response,
)

__all__ = ["ResponseShapeDecoder", "decode_response"]
