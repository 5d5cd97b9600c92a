from user.user_routes import bp as user_bp
from parties.party_routes import bp as party_bp
from items.item_routes import bp as item_bp
from transactions.transaction_routes import bp as transaction_bp
from bnpl.bnpl_routes import bp as bnpl_bp
from tally_sync.tally_sync_routes import bp as tally_sync_bp
from reports.report_routes import bp as report_bp


def register_routes(app):
    app.register_blueprint(user_bp, url_prefix="/users")
    app.register_blueprint(party_bp, url_prefix="/parties")
    app.register_blueprint(item_bp, url_prefix="/items")
    app.register_blueprint(transaction_bp, url_prefix="/transactions")
    app.register_blueprint(bnpl_bp, url_prefix="/bnpl-limits")
    app.register_blueprint(tally_sync_bp, url_prefix="/tally-sync")
    app.register_blueprint(report_bp, url_prefix="/reports")
