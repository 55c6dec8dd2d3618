#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Generate ASN QR code label sheets for Avery L4731REV-25.
"""

# local repo modules
import asn_qr_labels.cli


if __name__ == "__main__":
	asn_qr_labels.cli.main()
