"""
Merkle Mountain Range topologies

An MMR over N elements is one complete binary tree ("peak") per set bit
of N, largest first. Seven elements make three peaks:

   (1)     (2)    (3)

    /\\      /\\     6
   /  \\    4  5
  /\\  /\\
 0 1  2 3

The peaks are connected with RFC 6962, so more recent elements get
shorter proofs:

          /\\(3)
         /  6
        /\\
       /  \\
      /    \\
     /(1)   \\ (2)
    /\\      /\\
   /  \\    4  5
  /\\  /\\
 0 1  2 3
"""

from dataclasses import dataclass
from typing import List, Tuple

from .rfc6962 import check_range, rfc6962_proof_len


@dataclass(frozen=True)
class Peak:
    """One complete subtree of the range."""
    start: int
    height: int

    @property
    def size(self) -> int:
        return 1 << self.height

    def __contains__(self, index: int) -> bool:
        return self.start <= index < self.start + self.size


def mmr_peaks(n: int) -> List[Peak]:
    """Peaks of an n-element MMR, oldest (largest) first."""
    peaks = []
    start = 0
    for height in range(n.bit_length() - 1, -1, -1):
        if n & (1 << height):
            peaks.append(Peak(start=start, height=height))
            start += 1 << height
    return peaks


def locate(n: int, to: int) -> Tuple[int, int, Peak]:
    """
    Find the peak holding `to`.

    Returns:
        (number of peaks, index of the peak, the peak)
    """
    check_range(n, to)

    peaks = mmr_peaks(n)
    for index, peak in enumerate(peaks):
        if to in peak:
            return len(peaks), index, peak
    raise IndexError(f"Index {to} not covered by MMR peaks of {n}")


def mmr_proof_len(n: int, to: int) -> int:
    """Get to the peak through the RFC 6962 peak tree, then down the peak."""
    num_peaks, index, peak = locate(n, to)
    return rfc6962_proof_len(num_peaks, index) + peak.height


def mmr_linear_proof_len(n: int, to: int) -> int:
    """Peaks chained one after another instead of an RFC 6962 tree."""
    num_peaks, index, peak = locate(n, to)
    peaks_after = num_peaks - index - 1
    return (num_peaks - peaks_after) + peak.height
