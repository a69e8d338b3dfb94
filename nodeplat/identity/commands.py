"""Shell command templates for user/group management, per platform.

Templates are formatted with ``str.format`` using the fields ``name``,
``user``, ``group``, ``id`` and ``shell``. Id queries must print a single
number; mutations must exit 0 on success.
"""

from __future__ import annotations

from pydantic import BaseModel


class IdentityCommands(BaseModel):
    """The command set an IdentityProvisioner drives."""

    max_uid: str
    create_user: str
    set_user_shell: str
    set_user_uid: str
    set_user_gid: str
    max_gid: str
    create_group: str
    set_group_gid: str
    add_user_to_group: str


# macOS Directory Service command line utility
DARWIN_COMMANDS = IdentityCommands(
    max_uid="dscl . -list /Users UniqueID | awk '{{print $2}}' | sort -ug | tail -1",
    create_user="sudo dscl . -create /Users/{name}",
    set_user_shell="sudo dscl . -create /Users/{name} UserShell {shell}",
    set_user_uid="sudo dscl . -create /Users/{name} UniqueID {id}",
    set_user_gid="sudo dscl . -create /Users/{name} PrimaryGroupID {id}",
    max_gid="dscl . -list /Groups gid | awk '{{print $2}}' | sort -ug | tail -1",
    create_group="sudo dscl . -create /Groups/{name}",
    set_group_gid="sudo dscl . -create /Groups/{name} PrimaryGroupID {id}",
    add_user_to_group="sudo dscl . -append /Groups/{group} GroupMembership {user}",
)

# shadow-utils. Ids at or above 60000 (nobody, nogroup) are skipped when
# computing the max. A new user's uid doubles as its private gid, so max_uid
# reads both databases and the candidate is free in each. The private group
# must exist before usermod -g names it.
LINUX_COMMANDS = IdentityCommands(
    max_uid=(
        "{{ getent passwd; getent group; }} | awk -F: '$3 < 60000 {{print $3}}' | sort -ug | tail -1"
    ),
    create_user="sudo useradd -M -N {name}",
    set_user_shell="sudo usermod -s {shell} {name}",
    set_user_uid="sudo usermod -u {id} {name}",
    set_user_gid="sudo groupadd -g {id} {name} && sudo usermod -g {id} {name}",
    max_gid="getent group | awk -F: '$3 < 60000 {{print $3}}' | sort -ug | tail -1",
    create_group="sudo groupadd {name}",
    set_group_gid="sudo groupmod -g {id} {name}",
    add_user_to_group="sudo usermod -a -G {group} {user}",
)
