import os

from colorama import Fore, Style, init
init(autoreset=True)

def print_info(msg):
    print(Fore.CYAN + str(msg) + Style.RESET_ALL)

def print_warn(msg):
    print(Fore.YELLOW + str(msg) + Style.RESET_ALL)

def print_error(msg):
    print(Fore.RED + str(msg) + Style.RESET_ALL)

def print_debug(msg):
    # Debug chatter only when WALLETVIEW_DEBUG=1
    if os.getenv("WALLETVIEW_DEBUG", "0") != "1":
        return
    print(Fore.MAGENTA + str(msg) + Style.RESET_ALL)
