"""Constants for the pveshell CLI."""

APP_NAME = "pveshell"
APP_DESCRIPTION = "Command line helpers for Proxmox VE clusters"
APP_UPGRADE_FINISH = "app-upgrade-finish"

DEFAULT_TIMEOUT_OPTION = 30
MAX_TIMEOUT_OPTION = 86400

HOST_HELP = "The host name host[:port],host1[:port],host2[:port]"
API_TOKEN_HELP = "Api token format 'USER@REALM!TOKENID=UUID'. Require Proxmox VE 6.2 or later"
USERNAME_HELP = "User name <username>@<realm>"
PASSWORD_HELP = "The password. Specify 'file:path_file' to store password in file."
VMIDS_HELP = (
    "The id or name VM/CT comma separated (eg. 100,101,102,TestDebian). "
    "-vmid or -name exclude (e.g. -200,-TestUbuntu). "
    "Range 100:107,-105,200:204. "
    "'@pool-???' for all VM/CT in specific pool (e.g. @pool-customer1), "
    "'@all-???' for all VM/CT in specific host (e.g. @all-pve1, @all-$(hostname)), "
    "'@all' for all VM/CT in cluster"
)
