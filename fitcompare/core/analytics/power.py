from collections import deque
from typing import List, Optional

from .numeric import is_finite


def normalized_power(powers: List[Optional[float]], window: int = 30) -> int:
    """Compute normalized power using an O(n) rolling average and 4th-power mean.

    Missing or non-finite samples count as zero watts.

    Args:
        powers: sequence of power values (assumed 1Hz sampling)
        window: rolling average window length in seconds (default 30)
    """
    if not powers:
        return 0
    q = deque()
    s = 0.0
    rolling = []
    for p in powers:
        v = float(p) if is_finite(p) else 0.0
        q.append(v)
        s += v
        if len(q) > window:
            s -= q.popleft()
        rolling.append(s / len(q))
    fourth_powers = [x ** 4 for x in rolling]
    mean_fourth = sum(fourth_powers) / len(fourth_powers)
    return int(round(mean_fourth ** 0.25))
