"""
Presale countdown client.

Fetches the presale end time once (falling back to a fixed date on any failure) and then
ticks once per second until the target passes.
"""

from presale.countdown.fetch import FALLBACK_PRESALE_END, fetch_presale_end_time
from presale.countdown.timer import CountdownParts, run_countdown, show_sale_ended, split_distance, start_countdown

__all__ = [
    "FALLBACK_PRESALE_END",
    "CountdownParts",
    "fetch_presale_end_time",
    "run_countdown",
    "show_sale_ended",
    "split_distance",
    "start_countdown",
]
