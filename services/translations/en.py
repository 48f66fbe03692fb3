# -*- coding: utf-8 -*-
"""English translations."""

EN_TRANSLATIONS = {
    # Dialogs
    "dialog.error": "Error",
    "dialog.warning": "Warning",
    "dialog.success": "Success",

    # API errors
    "error.api.connection": "Could not reach the server. Please try again.",
    "error.api.timeout": "The request to the server timed out.",

    # Wizard navigation
    "wizard.button.previous": "Previous",
    "wizard.button.next": "Next",
    "wizard.button.finish": "Finish",
    "wizard.progress": "Step {current} of {total}",
    "wizard.progress.percent": "{percent}% Complete",
    "wizard.nav.step_invalid": "Complete \"{step}\" before continuing.",
    "wizard.nav.previous_steps_invalid": "Some earlier steps are not valid yet: {steps}",
    "wizard.nav.completed": "The form has already been submitted.",
    "wizard.nav.submitting": "Submitting...",

    # Wizard submission
    "wizard.error.incomplete": "Incomplete data. Unfinished steps: {steps}",
    "wizard.error.stored_data_detected": "Saved form data was found in storage. Reload the form to recover it.",
    "wizard.error.validation_details": "Validation errors:\n{details}",
    "wizard.error.submit_failed": "Submission failed. Please try again.",
    "wizard.success.submitted": "Submitted successfully.",

    # Property creation flow
    "flow.property.success": "Property created! Waiting for admin approval.",
    "flow.property.error": "Failed to create property",
    "flow.property.step.basic_data": "Basic Data",
    "flow.property.step.basic_data.description": "Basic information about your kos",
    "flow.property.step.location": "Location",
    "flow.property.step.location.description": "Address and coordinates",
    "flow.property.step.images": "Photos",
    "flow.property.step.images.description": "Building and facility photos",
    "flow.property.step.facilities_rules": "Facilities & Rules",
    "flow.property.step.facilities_rules.description": "Available facilities and house rules",

    # Room creation flow
    "flow.room.success": "Rooms created! The property is under review.",
    "flow.room.error": "Failed to create rooms",
    "flow.room.step.photos": "Room Photos",
    "flow.room.step.photos.description": "Photos for each room type",
    "flow.room.step.facilities": "Facilities",
    "flow.room.step.facilities.description": "Room and bathroom facilities",
    "flow.room.step.pricing": "Pricing",
    "flow.room.step.pricing.description": "Rent and payment options",
    "flow.room.step.management": "Room Management",
    "flow.room.step.management.description": "Details for each room",

    # Room type creation flow
    "flow.room_type.success": "Room type added.",
    "flow.room_type.error": "Failed to add room type",
    "flow.room_type.step.info": "Room Type Info",
    "flow.room_type.step.info.description": "Room type name and room count",
    "flow.room_type.step.description": "Description",
    "flow.room_type.step.description.description": "Room size and description",
    "flow.room_type.step.photos": "Photos",
    "flow.room_type.step.photos.description": "Room type photos",
    "flow.room_type.step.facilities": "Facilities",
    "flow.room_type.step.facilities.description": "Room and bathroom facilities",
    "flow.room_type.step.pricing": "Pricing",
    "flow.room_type.step.pricing.description": "Rent and deposit",
}
