"""
midievent core — decoding, mutation and their collaborators.

1. EVENT (event.py)
   - Status-byte decoding, note derivation, mutations, clone/reset

2. INPUTS (inputs.py)
   - Constructor field validation, tagged pitch/position inputs

3. LIFECYCLE (lifecycle.py)
   - new → moved / transposed / removed

4. NOTES (notes.py)
   - Pitch → name, octave, frequency

5. IDENTITY (identity.py)
   - Thread-safe process-wide id / event-number counter

6. PORTS (ports.py)
   - Song / Part / PlaybackHandle protocols

7. MESSAGES (messages.py)
   - mido message bridge
"""
