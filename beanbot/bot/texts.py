"""Telegram bot UI text constants."""

WELCOME = (
    "Welcome to this beancount bot! You can find more information in the repository's README.\n\n"
    "To get started with recording your first transaction, send /simple."
)

HELP = """You can use the following commands:

/help - List this command help
/simple [YYYY-MM-DD] - Record a simple transaction, optionally for a given date
/cancel - Cancel the transaction currently being entered
/comment <text> - Add a comment line to your list of records
/list [archived] - List your recorded transactions
/archiveAll - Archive recorded transactions
/deleteAll yes - Permanently delete recorded transactions
/currency [CODE] - Show or set the default currency
/tag [name|off] - Show, set or remove the tag added to new transactions
/tz [offset] - Show or set your timezone offset in whole hours"""

NO_OPEN_TX = (
    "Your transaction data could not be processed; you might need to start a transaction first with /simple. "
    "Send /help to see all commands."
)
NO_TX_TO_CANCEL = "There were no active transactions open to cancel."
TX_CANCELLED = "You have cancelled your transaction."
TX_REPLACED = "Your previous, unfinished transaction was discarded."
TX_CREATE_FAILED = "Could not start a new transaction: {error}"
TX_INPUT_FAILED = "Your last input seems to have gone wrong: {error}"
TX_RECORDED = (
    "Successfully recorded your transaction.\n"
    "You can get a list of all your transactions using /list. "
    "With /archiveAll you can archive all of them (e.g. once you copied them into your bean file)."
)
TX_SAVE_FAILED = "Something went wrong while saving your transaction: {error}\nHere it is so nothing gets lost:"

COMMENT_USAGE = 'Please provide the comment after the command, e.g. /comment "; Rent is due next week"'
COMMENT_ADDED = "Successfully added the comment to your transaction list."

LIST_EMPTY = "Your transaction list is empty. Check /help for commands to create a transaction."
ARCHIVED_ALL = "Archived {count} transactions. They no longer show up in /list."
DELETE_CONFIRM = "Please add 'yes' to the command to confirm the deletion of your transactions: /deleteAll yes"
DELETED_ALL = "Permanently deleted all your transactions ({count})."

CURRENCY_SHOW = "Your current currency is set to '{currency}'. To change it, send e.g. '/currency USD'."
CURRENCY_SET = "Changed default currency for all future transactions to '{currency}'."
TAG_SHOW = "Your current tag is '{tag}'. Send '/tag <name>' to change it or '/tag off' to remove it."
TAG_NONE = "You have no tag set. Send '/tag <name>' to add one to all new transactions."
TAG_SET = "All new transactions will be tagged with '#{tag}'."
TAG_REMOVED = "Removed the tag from new transactions."
TZ_SHOW = "Your timezone offset is {offset:+d} hours from UTC. Send e.g. '/tz 2' to change it."
TZ_SET = "Changed your timezone offset to {offset:+d} hours from UTC."
TZ_INVALID = "The timezone offset must be a whole number of hours between -12 and 14."
INVALID_VALUE = "That value was not accepted: {error}"
