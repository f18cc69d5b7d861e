#!/usr/bin/env python3
"""
dockview - View Model Module
-----------
Turns raw container records from the daemon into sorted, display-ready rows.
"""
from collections import namedtuple

from dockview.utils.utils import nz

ContainerSummary = namedtuple("ContainerSummary", ["id", "name", "image", "state", "status", "ports"])


def first_name(names):
    """Primary container name without the daemon's leading '/'"""
    if not names:
        return ""
    name = names[0]
    return name[1:] if name.startswith("/") else name


def format_ports(ports):
    """Render port bindings the way `docker ps` does, in daemon order"""
    if not ports:
        return "-"
    out = []
    for p in ports:
        proto = (p.get("Type") or "").lower()
        public = p.get("PublicPort") or 0
        if public > 0:
            out.append(f"{nz(p.get('IP'), '0.0.0.0')}:{public}->{p.get('PrivatePort', 0)}/{proto}")
        else:
            out.append(f"{p.get('PrivatePort', 0)}/{proto}")
    return ", ".join(out)


def sort_key(record):
    # Running containers first, then by name; sorted() is stable
    return (record.get("State") != "running", first_name(record.get("Names")))


def build_summaries(records):
    """Sorted ContainerSummary list for a container listing"""
    summaries = []
    for record in sorted(records or [], key=sort_key):
        summaries.append(ContainerSummary(
            id=record.get("Id", ""),
            name=first_name(record.get("Names")),
            image=record.get("Image", ""),
            state=record.get("State", ""),
            status=record.get("Status", ""),
            ports=format_ports(record.get("Ports")),
        ))
    return summaries
