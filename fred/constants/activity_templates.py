from fred.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- PURCHASE ORDERS ----------------
    ActivityCode.CREATE_PO:
        "{actor_role} ({actor_email}) created PO {target_name} as {to_status}",

    ActivityCode.UPDATE_PO:
        "{actor_role} ({actor_email}) updated PO {target_name}: {changes}",

    ActivityCode.CHANGE_PO_STATUS:
        "{actor_role} ({actor_email}) moved PO {target_name} "
        "from {from_status} to {to_status}",

    ActivityCode.DELETE_PO:
        "{actor_role} ({actor_email}) deleted PO {target_name}",

    # ---------------- RENTAL LINKS ----------------
    ActivityCode.LINK_PO_RENTAL:
        "{actor_role} ({actor_email}) linked PO {target_name} to rental {rental_id}",

    ActivityCode.UNLINK_PO_RENTAL:
        "{actor_role} ({actor_email}) unlinked PO {target_name} from rental {rental_id}",
}
