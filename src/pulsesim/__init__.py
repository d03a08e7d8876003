"""
pulsesim: discrete-event pulse propagation simulator

A simulator for small networks of logic modules wired by directed edges.
Each button press injects one low pulse; modules react in strict FIFO
order until the network settles.

Core concepts:
- Broadcast modules relay, flip-flops toggle on low, conjunctions NAND
  their remembered inputs
- A press is processed to quiescence before the next one starts
- Pulse totals over many presses answer bulk-counting questions
- Independent periodic feeders combine by least common multiple

See DESIGN.md for full details.
"""

__version__ = "0.1.0"
