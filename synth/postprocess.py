"""Trimming the end of a sample buffer to avoid an audible click.

A sine that stops mid-wave ends with a jump to silence. The buffer is cut
back to its last rising zero crossing (or to the last negative sample if
it ends on a positive half-wave) and a final zero sample is appended.

Example:
    >>> import torch
    >>> postprocess_buffer(torch.tensor([-2.0, -1.0, 1.0, 2.0, 1.0])).tolist()
    [-2.0, -1.0, 0.0]
"""

import torch


def samples_to_latest_rising_crossing(buffer: torch.Tensor) -> int | None:
    """Count samples from the end back to the latest rising zero crossing.

    A rising crossing is a pair of adjacent samples with the first below
    and the second above zero. The count includes the sample after the
    crossing.

    Returns:
        Number of samples from the end up to and including the sample
        after the crossing, or None if the buffer has no rising crossing.

    Examples:
        >>> import torch
        >>> samples_to_latest_rising_crossing(torch.tensor([-2.0, -1.0, 1.0, 2.0]))
        2
        >>> samples_to_latest_rising_crossing(torch.tensor([1.0, 2.0])) is None
        True
    """
    if buffer.numel() < 2:
        return None

    rising = (buffer[:-1] < 0) & (buffer[1:] > 0)
    indices = torch.nonzero(rising).flatten()
    if indices.numel() == 0:
        return None

    after_crossing = int(indices[-1]) + 1
    return buffer.numel() - after_crossing


def samples_to_trim(buffer: torch.Tensor) -> int:
    """Number of samples to drop from the end of `buffer`.

    If the buffer ends on a positive sample, everything after the last
    negative sample is dropped (nothing if there is none). Otherwise the
    buffer is cut back to its latest rising crossing, if any.
    """
    if buffer.numel() == 0:
        return 0

    if float(buffer[-1]) > 0:
        negatives = torch.nonzero(buffer < 0).flatten()
        if negatives.numel() == 0:
            return 0
        return buffer.numel() - 1 - int(negatives[-1])

    crossing = samples_to_latest_rising_crossing(buffer)
    return crossing if crossing is not None else 0


def postprocess_buffer(buffer: torch.Tensor) -> torch.Tensor:
    """Trim the tail of `buffer` and append a single zero sample.

    An empty buffer is returned unchanged.

    Examples:
        >>> import torch
        >>> postprocess_buffer(torch.tensor([2.0, 1.0])).tolist()
        [2.0, 1.0, 0.0]
    """
    if buffer.numel() == 0:
        return buffer

    keep = buffer.numel() - samples_to_trim(buffer)
    return torch.cat([buffer[:keep], buffer.new_zeros(1)])
