#!/usr/bin/env python3
"""
Basic AgentWave SDK usage example.

Decodes locally encoded devInspect return values, then optionally queries
a live fullnode when a prepared transaction is supplied.
Run with: python examples/basic_usage.py

Set AGENTWAVE_TX_BYTES (base64 TransactionKind calling get_agent_profile)
and AGENTWAVE_OWNER to also run the live query.
"""

import logging
import os

from agentwave import (
    AgentProfile,
    AgentWaveClient,
    TESTNET,
    AgentWaveError,
    configure_logging,
    decode_agent_profile,
    decode_escrows,
)
from agentwave.shapes import ReturnValue
from agentwave.testing import create_sample_agent_profile, create_sample_escrow
from agentwave.testing.encoder import encode_escrow_list, profile_return_values

configure_logging(level=logging.INFO)

print("=== AgentWave SDK Basic Usage Example ===\n")

# 1. Decode a profile in both result shapes
print("1. Decoding an agent profile...")
profile = create_sample_agent_profile()

packed = profile_return_values(profile)
separated = profile_return_values(profile, separated=True, tagged=True)
print(f"   Packed shape: {len(packed)} blob, separated shape: {len(separated)} blobs")

from_packed = decode_agent_profile(profile.owner, packed)
from_separated = decode_agent_profile(profile.owner, separated)
assert from_packed == from_separated == profile
print(f"   {from_packed.name}: {', '.join(from_packed.capabilities)} (rating {from_packed.rating})")
print(f"   Created: {from_packed.created_at_datetime}")
print("\n   OK: Both shapes decode to the same profile\n")

# 2. Decode a list of escrows
print("2. Decoding escrows...")
escrows = [
    create_sample_escrow(),
    create_sample_escrow(job_title="Logo design", status=7, blob_id="Xb3kq9Vw0pQ"),
]
for escrow in decode_escrows([ReturnValue(encode_escrow_list(escrows))]):
    print(f"   {escrow.job_title}: {escrow.status_label}, budget {escrow.budget_sui} SUI")
    if escrow.blob_id:
        print(f"   Deliverable: {escrow.blob_url(TESTNET.walrus_aggregator)}")
print("\n   OK: Escrows decoded\n")

# 3. Malformed data falls back instead of raising
print("3. Decoding malformed bytes...")
fallback = decode_agent_profile(profile.owner, [ReturnValue(b"\x0aBot")])
assert fallback == AgentProfile.placeholder(profile.owner)
print(f"   Placeholder name: {fallback.name}")
print("\n   OK: Decode failure logged and placeholder returned\n")

# 4. Live query
tx_bytes = os.environ.get("AGENTWAVE_TX_BYTES")
owner = os.environ.get("AGENTWAVE_OWNER")
if tx_bytes and owner:
    print("4. Querying the fullnode...")
    try:
        with AgentWaveClient.from_env() as client:
            for listing in client.list_agent_profile_events(limit=5):
                print(f"   Registered: {listing.name} ({listing.owner[:10]}...)")
            live = client.get_agent_profile(owner, tx_bytes)
            print(f"   {live.name} ({'active' if live.is_active else 'inactive'})")
    except AgentWaveError as e:
        print(f"   Query failed: {e}")
else:
    print("4. Skipping live query (AGENTWAVE_TX_BYTES / AGENTWAVE_OWNER not set)")

print("\n=== Done ===")
